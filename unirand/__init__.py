"""
unirand — uniform random numbers from raw pseudo-random generators.

Features:

- A small ``PRNG`` base class: declare a native word, optional output bounds,
  and a draw primitive; everything else is derived.
- Unbiased bit composition of values wider or narrower than a generator's word.
- Uniform integers (signed and unsigned, any fixed width) over [a, b] via
  rejection sampling, and uniform floats over [a, b) built from weighted draws.
- Seeding from OS entropy (secure device or the OS cryptographic API via
  PyCryptodomex) or from a passphrase through Argon2id.
- Concrete generators: xoroshiro128+, PCG32, ChaCha20 keystream, BLAKE2b counter.

Generators are not thread-safe; guard shared instances with a lock.
"""

from .errors import (
    EntropyUnavailableError,
    InvalidBitCountError,
    InvalidRangeError,
    NegativeCountError,
    UnirandError,
)
from .numeric import Float32, Float64, Int8, Int16, Int32, Int64, UInt8, UInt16, UInt32, UInt64
from .prng import PRNG
from .generators import Blake2bGenerator, ChaCha20Generator, PCG32, Xoroshiro128Plus

__version__ = "0.1"

__all__ = [
    "PRNG",
    "Xoroshiro128Plus",
    "PCG32",
    "ChaCha20Generator",
    "Blake2bGenerator",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "UnirandError",
    "InvalidRangeError",
    "NegativeCountError",
    "InvalidBitCountError",
    "EntropyUnavailableError",
]
