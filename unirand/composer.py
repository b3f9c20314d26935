"""Bit composition: unsigned values of an exact bit count from raw draws.

A generator whose declared range does not fill its native word supplies only
``random_bit_width()`` uniformly distributed bits per draw. Values are built
chunk by chunk from those bits; any draw landing in the truncated high tail
of the range is rejected so every composed bit pattern stays equally likely.

Rejection terminates with probability one for any generator with
``min < max``. A generator with ``min == max`` is a caller contract violation
and will loop forever; it is not detected here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .errors import InvalidBitCountError
from .numeric import IntegerType

if TYPE_CHECKING:  # pragma: no cover
    from .prng import PRNG


def usable_bit_width(word: IntegerType, lo: int, hi: int) -> int:
    """Number of uniformly distributed bits in a draw from ``[lo, hi]``."""
    difference = hi - lo
    if difference >= word.max:
        return word.bit_width
    return word.bit_width - word.leading_zero_bit_count(difference + 1) - 1


def _next_accepted(generator: "PRNG", threshold: int) -> int:
    lo = type(generator).min
    while True:
        value = next(generator) - lo
        if value <= threshold:
            return value


def random_bits(generator: "PRNG", kind: IntegerType, bit_count: Optional[int] = None) -> int:
    """Return an unsigned ``kind`` value in ``[0, 2 ** min(bit_count, kind.bit_width))``."""
    cls = type(generator)
    word = cls.word
    random_bit_width = cls.random_bit_width()
    if bit_count is None:
        bit_count = kind.bit_width
    if bit_count < 1:
        raise InvalidBitCountError(f"Bit count should be positive, got {bit_count}")
    bit_count = min(bit_count, kind.bit_width)

    if (
        kind.bit_width == word.bit_width
        and random_bit_width == word.bit_width
        and bit_count == kind.bit_width
    ):
        return next(generator) & kind.mask

    quotient, remainder = divmod(bit_count, random_bit_width)
    threshold = word.max >> (word.bit_width - random_bit_width)
    temporary = 0
    for i in range(quotient):
        temporary += (_next_accepted(generator, threshold) << (random_bit_width * i)) & kind.mask
    if remainder != 0:
        mask = word.max >> (word.bit_width - remainder)
        chunk = _next_accepted(generator, threshold) & mask
        temporary += (chunk << (random_bit_width * quotient)) & kind.mask
    return temporary & kind.mask
