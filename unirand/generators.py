from __future__ import annotations

import hashlib
from typing import Dict, Optional, Tuple, Type

try:  # pragma: no cover - optional dependency at runtime
    from Cryptodome.Cipher import ChaCha20  # type: ignore
    _HAS_CRYPTODOME = True
except ImportError:  # pragma: no cover - reported at use
    ChaCha20 = None  # type: ignore
    _HAS_CRYPTODOME = False

from .numeric import UInt8, UInt32, UInt64
from .prng import PRNG


_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _rotl64(v: int, n: int) -> int:
    return ((v << n) & _MASK64) | (v >> (64 - n))


class Xoroshiro128Plus(PRNG):
    """xoroshiro128+ (2018 constants). State is a pair of 64-bit words, not both zero."""

    word = UInt64
    state_size = 16

    def __init__(self, state: Tuple[int, int]):
        s0, s1 = state
        if not (s0 & _MASK64 or s1 & _MASK64):
            raise ValueError("xoroshiro128+ state must not be all zero")
        super().__init__((s0 & _MASK64, s1 & _MASK64))

    @classmethod
    def _state_from_bytes(cls, data: bytes) -> Tuple[int, int]:
        s0 = int.from_bytes(data[:8], "little")
        s1 = int.from_bytes(data[8:16], "little")
        if s0 == 0 and s1 == 0:
            s1 = 1
        return s0, s1

    def __next__(self) -> int:
        s0, s1 = self.state
        result = (s0 + s1) & _MASK64
        s1 ^= s0
        self.state = (
            _rotl64(s0, 24) ^ s1 ^ ((s1 << 16) & _MASK64),
            _rotl64(s1, 37),
        )
        return result


class PCG32(PRNG):
    """PCG-XSH-RR with 64-bit state and 32-bit output."""

    word = UInt32
    state_size = 16

    _MULTIPLIER = 6364136223846793005
    DEFAULT_INCREMENT = 1442695040888963407

    def __init__(self, state: Tuple[int, int]):
        s, inc = state
        super().__init__((s & _MASK64, (inc | 1) & _MASK64))

    @classmethod
    def _state_from_bytes(cls, data: bytes) -> Tuple[int, int]:
        return cls._seeded_state(int.from_bytes(data[:8], "little"), int.from_bytes(data[8:16], "little"))

    @classmethod
    def _seeded_state(cls, initstate: int, initseq: int) -> Tuple[int, int]:
        inc = ((initseq << 1) | 1) & _MASK64
        s = inc  # one step from a zero state
        s = (s + initstate) & _MASK64
        s = (s * cls._MULTIPLIER + inc) & _MASK64
        return s, inc

    @classmethod
    def seeded(cls, initstate: int, initseq: int = DEFAULT_INCREMENT >> 1) -> "PCG32":
        """Seed the way the reference ``pcg32_srandom`` does."""
        return cls(cls._seeded_state(initstate, initseq))

    def __next__(self) -> int:
        oldstate, inc = self.state
        self.state = ((oldstate * self._MULTIPLIER + inc) & _MASK64, inc)
        xorshifted = (((oldstate >> 18) ^ oldstate) >> 27) & _MASK32
        rot = oldstate >> 59
        return (xorshifted >> rot) | ((xorshifted << ((-rot) & 31)) & _MASK32)


class _BlockGenerator(PRNG):
    """Generator reading words out of fixed-size keystream blocks.

    State is ``(key, position)`` where ``position`` counts words already
    drawn; the current block is cached and recomputed whenever the state no
    longer points into it.
    """

    block_size = 64
    state_size = 32

    def __init__(self, state: Tuple[bytes, int]):
        key, position = state
        if len(key) != self.state_size:
            raise ValueError(f"{type(self).__name__} key must be {self.state_size} bytes")
        if position < 0:
            raise ValueError("Stream position must be non-negative")
        super().__init__((bytes(key), position))
        self._cached: Optional[Tuple[bytes, int]] = None
        self._block = b""

    @classmethod
    def _state_from_bytes(cls, data: bytes) -> Tuple[bytes, int]:
        return bytes(data), 0

    def _compute_block(self, key: bytes, index: int) -> bytes:
        raise NotImplementedError

    def __next__(self) -> int:
        key, position = self.state
        word_bytes = self.word.bit_width // 8
        per_block = self.block_size // word_bytes
        index, offset = divmod(position, per_block)
        if self._cached != (key, index):
            self._block = self._compute_block(key, index)
            self._cached = (key, index)
        self.state = (key, position + 1)
        start = offset * word_bytes
        return int.from_bytes(self._block[start : start + word_bytes], "little")


class ChaCha20Generator(_BlockGenerator):
    """ChaCha20 keystream (zero nonce) read as little-endian 32-bit words."""

    word = UInt32
    block_size = 64

    _NONCE = b"\x00" * 8

    def _compute_block(self, key: bytes, index: int) -> bytes:
        if not _HAS_CRYPTODOME:
            raise RuntimeError("PyCryptodomex is required for the ChaCha20 generator")
        cipher = ChaCha20.new(key=key, nonce=self._NONCE)
        cipher.seek(index * self.block_size)
        return cipher.encrypt(b"\x00" * self.block_size)


class Blake2bGenerator(_BlockGenerator):
    """Byte generator hashing ``key || block_index`` with BLAKE2b."""

    word = UInt8
    block_size = 32

    def _compute_block(self, key: bytes, index: int) -> bytes:
        material = key + index.to_bytes(8, "little")
        return hashlib.blake2b(material, digest_size=self.block_size).digest()


GENERATORS: Dict[str, Type[PRNG]] = {
    "xoroshiro128+": Xoroshiro128Plus,
    "pcg32": PCG32,
    "chacha20": ChaCha20Generator,
    "blake2b": Blake2bGenerator,
}


def generator_class(name: str) -> Type[PRNG]:
    try:
        return GENERATORS[name.lower()]
    except KeyError:
        raise ValueError(f"unknown generator: {name}") from None
