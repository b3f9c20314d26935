"""The raw generator abstraction.

A ``PRNG`` is an infinite iterator of unsigned integers of its native
``word`` type, restricted to the closed range ``[min, max]``. Subclasses only
supply state handling and ``__next__``; every distribution is derived from
those draws by the free functions in ``composer`` and ``uniform``.

Generators mutate their state on every draw and are not safe to share between
threads without an external lock.

Adding a generator
------------------

Subclass ``PRNG`` and define:

- ``word``: the native ``IntegerType`` (default ``UInt64``);
- ``min`` / ``max``: declared output bounds if narrower than ``word``;
- ``state_size``: bytes of seed material needed for a fresh state;
- ``_state_from_bytes(data)``: build a state from that material;
- ``__next__``: advance the state and return one draw.

A generator whose ``min`` equals its ``max`` makes every rejection loop spin
forever. Nothing detects this; do not declare such a generator.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from .composer import random_bits as _random_bits, usable_bit_width
from .entropy import EntropySource, default_entropy_source
from .errors import EntropyUnavailableError, GeneratorDefinitionError
from .numeric import Float64, FloatType, IntegerType, UInt64
from .seeding import derive_seed
from .sequence import BoundedSequence
from .uniform import random_unit as _random_unit, uniform as _uniform


class PRNG:
    word: IntegerType = UInt64
    min: int = UInt64.min
    max: int = UInt64.max
    state_size: int = 16

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        word = cls.word
        if word.signed:
            raise GeneratorDefinitionError(f"{cls.__name__}: native word must be unsigned")
        # Bounds default to the full word, also when a subclass narrows the word.
        redefined_word = "word" in cls.__dict__
        if redefined_word and "min" not in cls.__dict__:
            cls.min = word.min
        if redefined_word and "max" not in cls.__dict__:
            cls.max = word.max
        if not (word.contains(cls.min) and word.contains(cls.max)):
            raise GeneratorDefinitionError(f"{cls.__name__}: bounds must fit in {word}")
        if cls.min > cls.max:
            raise GeneratorDefinitionError(f"{cls.__name__}: min must not exceed max")

    def __init__(self, state: Any):
        self.state = state

    @classmethod
    def _state_from_bytes(cls, data: bytes) -> Any:
        raise NotImplementedError

    @classmethod
    def from_entropy(
        cls, source: Optional[EntropySource] = None, *, required: bool = False
    ) -> Optional["PRNG"]:
        """Create a generator seeded with cryptographically secure bytes.

        Returns None when the entropy source cannot supply enough bytes, or
        raises ``EntropyUnavailableError`` instead when ``required`` is set.
        """
        if source is None:
            source = default_entropy_source()
        data = source.fetch(cls.state_size)
        if data is None:
            if required:
                raise EntropyUnavailableError(
                    f"{source.name} entropy backend could not supply {cls.state_size} bytes"
                )
            return None
        return cls(cls._state_from_bytes(data))

    @classmethod
    def from_seed(cls, seed: bytes) -> "PRNG":
        if len(seed) != cls.state_size:
            raise ValueError(f"{cls.__name__} expects a {cls.state_size}-byte seed")
        return cls(cls._state_from_bytes(seed))

    @classmethod
    def from_passphrase(cls, passphrase: str, salt: bytes) -> "PRNG":
        return cls(cls._state_from_bytes(derive_seed(passphrase, salt, cls.state_size)))

    @classmethod
    def random_bit_width(cls) -> int:
        """Number of uniformly distributed bits available from one draw."""
        return usable_bit_width(cls.word, cls.min, cls.max)

    def __iter__(self):
        return self

    def __next__(self) -> int:
        raise NotImplementedError

    def random_bits(self, kind: IntegerType, bit_count: Optional[int] = None) -> int:
        return _random_bits(self, kind, bit_count)

    def random_unit(self, kind: FloatType = Float64, bit_count: Optional[int] = None) -> float:
        return _random_unit(self, kind, bit_count)

    def uniform(
        self,
        kind: Union[IntegerType, FloatType] = Float64,
        a=None,
        b=None,
        *,
        count: Optional[int] = None,
        bit_count: Optional[int] = None,
    ) -> Union[int, float, BoundedSequence]:
        """Draw from the uniform distribution of ``kind`` over ``[a, b]`` / ``[a, b)``.

        Integer kinds use the closed range and default to the whole type;
        float kinds use the half-open range and default to ``[0, 1)``. Pass
        ``count`` for a finite sequence of draws and ``bit_count`` to limit the
        precision of float draws; integer kinds reject ``bit_count``.
        """
        return _uniform(self, kind, a, b, count=count, bit_count=bit_count)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(word={self.word}, min={self.min}, max={self.max})"
