from __future__ import annotations

try:  # pragma: no cover - availability depends on environment
    from argon2.low_level import Type as _ArgonType, hash_secret_raw as _argon_hash  # type: ignore
    _HAS_ARGON2 = True
except ImportError:  # pragma: no cover - reported at use
    _ArgonType = None  # type: ignore
    _argon_hash = None  # type: ignore
    _HAS_ARGON2 = False

from .constants import (
    ARGON_MEMORY_COST_KIB,
    ARGON_PARALLELISM,
    ARGON_TIME_COST,
    MIN_SALT_SIZE,
)


def derive_seed(passphrase: str, salt: bytes, size: int) -> bytes:
    """Derive ``size`` bytes of generator seed material from a passphrase.

    The same passphrase and salt always give the same bytes, so a generator
    seeded this way replays the same stream. Argon2id parameters are fixed in
    ``constants``.
    """
    if not (_HAS_ARGON2 and _argon_hash is not None and _ArgonType is not None):
        raise RuntimeError("argon2-cffi is required for passphrase seeding")
    if len(salt) < MIN_SALT_SIZE:
        raise ValueError(f"Salt must be at least {MIN_SALT_SIZE} bytes")
    # Argon2 refuses outputs shorter than 4 bytes.
    hash_len = max(size, 4)
    key = _argon_hash(
        passphrase.encode("utf-8"),
        salt,
        time_cost=ARGON_TIME_COST,
        memory_cost=ARGON_MEMORY_COST_KIB,
        parallelism=ARGON_PARALLELISM,
        hash_len=hash_len,
        type=_ArgonType.ID,
    )
    return key[:size]
