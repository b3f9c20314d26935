"""Fixed-width integer and binary floating-point type descriptors.

Python integers are unbounded and Python floats are always IEEE-754 doubles,
so the sampling routines are parameterized over these descriptors instead of
over native types. An ``IntegerType`` knows its width, signedness and bounds;
a ``FloatType`` knows its significand width and rounds a Python float to its
own precision when called.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class IntegerType:
    name: str
    bit_width: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bit_width - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        if self.signed:
            return (1 << (self.bit_width - 1)) - 1
        return (1 << self.bit_width) - 1

    @property
    def mask(self) -> int:
        return (1 << self.bit_width) - 1

    @property
    def magnitude(self) -> "IntegerType":
        """Unsigned type of the same width."""
        if not self.signed:
            return self
        return _UNSIGNED_BY_WIDTH[self.bit_width]

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def truncate(self, value: int) -> int:
        """Wrap ``value`` to this width (two's complement for signed types)."""
        value &= self.mask
        if self.signed and value > self.max:
            value -= 1 << self.bit_width
        return value

    def leading_zero_bit_count(self, value: int) -> int:
        return self.bit_width - (value & self.mask).bit_length()

    def __repr__(self) -> str:
        return self.name


@dataclass(frozen=True)
class FloatType:
    name: str
    significand_bit_count: int
    format: str

    def __call__(self, value: float) -> float:
        # Doubles carry more than twice the single-precision significand, so
        # rounding each double result once is exact for + - * /.
        if self.format == "d":
            return float(value)
        value = float(value)
        try:
            packed = struct.pack("<" + self.format, value)
        except OverflowError:
            # Only raised for finite values that round past the largest float.
            return math.copysign(math.inf, value)
        return struct.unpack("<" + self.format, packed)[0]

    def __repr__(self) -> str:
        return self.name


UInt8 = IntegerType("UInt8", 8, False)
UInt16 = IntegerType("UInt16", 16, False)
UInt32 = IntegerType("UInt32", 32, False)
UInt64 = IntegerType("UInt64", 64, False)

Int8 = IntegerType("Int8", 8, True)
Int16 = IntegerType("Int16", 16, True)
Int32 = IntegerType("Int32", 32, True)
Int64 = IntegerType("Int64", 64, True)

Float32 = FloatType("Float32", 23, "f")
Float64 = FloatType("Float64", 52, "d")

_UNSIGNED_BY_WIDTH: Dict[int, IntegerType] = {t.bit_width: t for t in (UInt8, UInt16, UInt32, UInt64)}

INTEGER_TYPES: Dict[str, IntegerType] = {
    t.name.lower(): t for t in (UInt8, UInt16, UInt32, UInt64, Int8, Int16, Int32, Int64)
}
FLOAT_TYPES: Dict[str, FloatType] = {t.name.lower(): t for t in (Float32, Float64)}


def integer_type(name: str) -> IntegerType:
    try:
        return INTEGER_TYPES[name.lower()]
    except KeyError:
        raise ValueError(f"unknown integer type: {name}") from None


def float_type(name: str) -> FloatType:
    try:
        return FLOAT_TYPES[name.lower()]
    except KeyError:
        raise ValueError(f"unknown float type: {name}") from None
