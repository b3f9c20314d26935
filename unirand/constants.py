import sys


# Entropy backends
ENTROPY_BACKEND_DEVICE = "device"
ENTROPY_BACKEND_CRYPTO = "crypto"

ENTROPY_DEVICE_PATH = "/dev/urandom"

# Sandboxing can make the device unavailable outside Linux; use the OS API there.
DEFAULT_ENTROPY_BACKEND = (
    ENTROPY_BACKEND_DEVICE if sys.platform.startswith("linux") else ENTROPY_BACKEND_CRYPTO
)


# Argon2id parameters for passphrase-derived generator state
ARGON_TIME_COST = 2
ARGON_MEMORY_COST_KIB = 19 * 1024  # 19 MiB
ARGON_PARALLELISM = 1
MIN_SALT_SIZE = 8


# Defaults used by the CLI
DEFAULT_GENERATOR = "xoroshiro128+"
DEFAULT_INTEGER_TYPE = "uint64"
DEFAULT_FLOAT_TYPE = "float64"
