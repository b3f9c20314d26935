"""Uniform distributions built on bit composition.

Integers over a closed range ``[a, b]`` are drawn by rejection: a value of
just enough bits to cover ``b - a`` is composed and discarded while it exceeds
the span, which avoids the modulo bias of reducing a wider draw.

Floats over ``[0, 1)`` are a weighted sum of raw draws accumulated as a
``(dividend, divisor)`` pair, each draw adding one more "digit" in base
``max - min + 1`` until the requested precision is covered.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Tuple, Union

from .composer import random_bits
from .errors import InvalidBitCountError, InvalidRangeError
from .numeric import FloatType, Float64, IntegerType
from .sequence import BoundedSequence

if TYPE_CHECKING:  # pragma: no cover
    from .prng import PRNG


def _check_bounds(kind: IntegerType, a: int, b: int) -> None:
    if not (kind.contains(a) and kind.contains(b)):
        raise InvalidRangeError(f"Bounds {a}..{b} are not representable as {kind}")
    if b < a:
        raise InvalidRangeError("Discrete uniform distribution parameter b should not be less than a")


def _sample_span(generator: "PRNG", kind: IntegerType, difference: int) -> int:
    # ``kind`` is unsigned here; ``difference`` is below kind.max.
    bit_count = kind.bit_width - kind.leading_zero_bit_count(difference)
    while True:
        temporary = random_bits(generator, kind, bit_count)
        if temporary <= difference:
            return temporary


def uniform_unsigned(generator: "PRNG", kind: IntegerType, a: int, b: int) -> int:
    _check_bounds(kind, a, b)
    if a == b:
        return a
    difference = b - a
    if difference == kind.max:
        return kind.truncate(random_bits(generator, kind) + a)
    return _sample_span(generator, kind, difference) + a


def _magnitude_span(a: int, b: int) -> int:
    # Unsigned distance from a to b, computed from magnitudes only.
    if a < 0:
        if b < 0:
            return abs(a) - abs(b)
        return abs(b) + abs(a)
    return abs(b) - abs(a)


def uniform_signed(generator: "PRNG", kind: IntegerType, a: int, b: int) -> int:
    _check_bounds(kind, a, b)
    if a == b:
        return a
    magnitude = kind.magnitude
    negative = a < 0
    difference = _magnitude_span(a, b)
    if difference == magnitude.max:
        temporary = random_bits(generator, magnitude)
    else:
        temporary = _sample_span(generator, magnitude, difference)
    if negative:
        return kind.truncate(temporary - abs(a))
    return kind.truncate(temporary + abs(a))


def uniform_integer(
    generator: "PRNG", kind: IntegerType, a: Optional[int] = None, b: Optional[int] = None
) -> int:
    """Return an integer of ``kind`` uniformly distributed over ``[a, b]``.

    Without bounds the whole range of ``kind`` is used.
    """
    if (a is None) != (b is None):
        raise TypeError("Both a and b must be given, or neither")
    if a is None:
        a, b = kind.min, kind.max
    if kind.signed:
        return uniform_signed(generator, kind, a, b)
    return uniform_unsigned(generator, kind, a, b)


def random_unit(generator: "PRNG", kind: FloatType = Float64, bit_count: Optional[int] = None) -> float:
    """Return a ``kind`` value in [0, 1) with ``min(bit_count, significand)`` bits of precision.

    When one draw carries more bits than the significand (a 64-bit word into
    a double, say) the quotient can round up to exactly 1.0; ``uniform_float``
    discards such results.
    """
    cls = type(generator)
    if bit_count is None:
        bit_count = kind.significand_bit_count
    if bit_count < 1:
        raise InvalidBitCountError(f"Bit count should be positive, got {bit_count}")
    bit_count = min(bit_count, kind.significand_bit_count)
    k = max(1, math.ceil(bit_count / cls.random_bit_width()))
    step = kind(cls.max - cls.min)
    dividend, divisor = kind(0.0), kind(1.0)
    for _ in range(k):
        d = next(generator)
        dividend = kind(dividend + kind(kind(d - cls.min) * divisor))
        divisor = kind(divisor + kind(step * divisor))
    return kind(dividend / divisor)


def _check_interval(kind: FloatType, a: float, b: float) -> Tuple[float, float]:
    a, b = kind(a), kind(b)
    if not (math.isfinite(a) and math.isfinite(b)):
        raise InvalidRangeError(f"Bounds {a}..{b} are not finite in {kind}")
    if not b > a:
        raise InvalidRangeError("Uniform distribution parameter b should be greater than a")
    return a, b


def uniform_float(
    generator: "PRNG",
    kind: FloatType = Float64,
    a: float = 0.0,
    b: float = 1.0,
    bit_count: Optional[int] = None,
) -> float:
    """Return a ``kind`` value uniformly distributed over ``[a, b)``.

    Both bounds must be finite in ``kind``. Results that round up to ``b``
    are discarded and drawn again. When ``b - a`` overflows ``kind`` the
    draw is placed on the halved interval and doubled back.
    """
    a, b = _check_interval(kind, a, b)
    offset, span, scale = a, kind(b - a), 1.0
    if math.isinf(span):
        # Both bounds are huge here, so halving them is exact.
        offset = kind(a / 2)
        span, scale = kind(kind(b / 2) - offset), 2.0
    while True:
        unit = random_unit(generator, kind, bit_count)
        temporary = kind(scale * kind(kind(span * unit) + offset))
        if temporary < b:
            return temporary


def uniform(
    generator: "PRNG",
    kind: Union[IntegerType, FloatType] = Float64,
    a=None,
    b=None,
    *,
    count: Optional[int] = None,
    bit_count: Optional[int] = None,
) -> Union[int, float, BoundedSequence]:
    """Dispatch to the integer or floating-point distribution for ``kind``.

    Without bounds floats default to ``[0, 1)`` and integers to the whole
    range of ``kind``. With ``count`` a ``BoundedSequence`` of that many draws
    is returned; the range is validated before the sequence is handed out.
    ``bit_count`` limits the precision of float draws and is rejected for
    integer kinds.
    """
    if (a is None) != (b is None):
        raise TypeError("Both a and b must be given, or neither")

    if isinstance(kind, FloatType):
        lo, hi = _check_interval(kind, *((0.0, 1.0) if a is None else (a, b)))

        def draw():
            return uniform_float(generator, kind, lo, hi, bit_count)

    else:
        if bit_count is not None:
            raise TypeError(f"bit_count applies to float kinds, not {kind}")
        lo, hi = (kind.min, kind.max) if a is None else (a, b)
        _check_bounds(kind, lo, hi)

        def draw():
            return uniform_integer(generator, kind, lo, hi)

    if count is None:
        return draw()
    return BoundedSequence(draw, count)
