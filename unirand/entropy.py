"""Cryptographically secure entropy for seeding generators.

Two backends share one contract: ``fetch(n)`` returns exactly ``n`` secure
bytes or ``None``. A partially filled buffer is never returned. The backend is
picked from configuration (``constants.DEFAULT_ENTROPY_BACKEND``) rather than
by probing at call time.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

try:  # pragma: no cover - availability depends on environment
    from Cryptodome.Random import get_random_bytes as _get_random_bytes  # type: ignore
    _HAS_CRYPTODOME = True
except ImportError:  # pragma: no cover - reported at use
    _get_random_bytes = None  # type: ignore
    _HAS_CRYPTODOME = False

from .constants import (
    DEFAULT_ENTROPY_BACKEND,
    ENTROPY_BACKEND_CRYPTO,
    ENTROPY_BACKEND_DEVICE,
    ENTROPY_DEVICE_PATH,
)
from .errors import NegativeCountError
from .numeric import IntegerType


logger = logging.getLogger(__name__)


class EntropySource:
    """Abstract source of cryptographically secure random bytes."""

    name = "abstract"

    def _read(self, byte_count: int) -> Optional[bytes]:
        raise NotImplementedError

    def fetch(self, byte_count: int) -> Optional[bytes]:
        """Return ``byte_count`` secure bytes, or None if they are unavailable."""
        if byte_count < 0:
            raise NegativeCountError("Byte count should be non-negative")
        if byte_count == 0:
            return b""
        data = self._read(byte_count)
        if data is None or len(data) != byte_count:
            logger.debug("%s entropy backend could not supply %d bytes", self.name, byte_count)
            return None
        return bytes(data)

    def fetch_words(
        self, kind: IntegerType, count: Optional[int] = None
    ) -> Union[int, List[int], None]:
        """Return one unsigned ``kind`` value (or a list of ``count``) filled with secure bytes."""
        if kind.signed:
            raise ValueError("Entropy words must be of an unsigned type")
        size = kind.bit_width // 8
        n = 1 if count is None else count
        if n < 0:
            raise NegativeCountError("Element count should be non-negative")
        data = self.fetch(size * n)
        if data is None:
            return None
        words = [int.from_bytes(data[i : i + size], "little") for i in range(0, size * n, size)]
        return words[0] if count is None else words


class DeviceEntropySource(EntropySource):
    """Reads a secure random device such as ``/dev/urandom``."""

    name = ENTROPY_BACKEND_DEVICE

    def __init__(self, path: str = ENTROPY_DEVICE_PATH):
        self.path = path

    def _read(self, byte_count: int) -> Optional[bytes]:
        try:
            with open(self.path, "rb", buffering=0) as fh:
                chunks = []
                remaining = byte_count
                while remaining:
                    chunk = fh.read(remaining)
                    if not chunk:
                        return None
                    chunks.append(chunk)
                    remaining -= len(chunk)
        except OSError as exc:
            logger.debug("cannot read entropy device %s: %s", self.path, exc)
            return None
        return b"".join(chunks)


class CryptoEntropySource(EntropySource):
    """Uses the operating system's cryptographic API through PyCryptodomex."""

    name = ENTROPY_BACKEND_CRYPTO

    def _read(self, byte_count: int) -> Optional[bytes]:
        if not _HAS_CRYPTODOME:
            raise RuntimeError("PyCryptodomex is required for the crypto entropy backend")
        try:
            return _get_random_bytes(byte_count)
        except OSError as exc:
            logger.debug("OS cryptographic API failed: %s", exc)
            return None


_BACKENDS = {
    ENTROPY_BACKEND_DEVICE: DeviceEntropySource,
    ENTROPY_BACKEND_CRYPTO: CryptoEntropySource,
}


def select_entropy_source(name: str) -> EntropySource:
    try:
        backend = _BACKENDS[name]
    except KeyError:
        raise ValueError(f"unknown entropy backend: {name}") from None
    return backend()


def default_entropy_source() -> EntropySource:
    return select_entropy_source(DEFAULT_ENTROPY_BACKEND)


def fetch(byte_count: int, source: Optional[EntropySource] = None) -> Optional[bytes]:
    """Fetch secure bytes from ``source`` or the platform default backend."""
    if source is None:
        source = default_entropy_source()
    return source.fetch(byte_count)
