from __future__ import annotations

import argparse
import json as _json
import sys
from itertools import islice
from typing import Iterable, List, Optional

from unirand.constants import (
    DEFAULT_ENTROPY_BACKEND,
    DEFAULT_FLOAT_TYPE,
    DEFAULT_GENERATOR,
    DEFAULT_INTEGER_TYPE,
    ENTROPY_BACKEND_CRYPTO,
    ENTROPY_BACKEND_DEVICE,
)
from unirand.entropy import select_entropy_source
from unirand.errors import EntropyUnavailableError, UnirandError
from unirand.generators import GENERATORS, generator_class
from unirand.numeric import FLOAT_TYPES, INTEGER_TYPES, float_type, integer_type
from unirand.prng import PRNG


def _make_generator(
    name: str,
    *,
    seed: Optional[str] = None,
    passphrase: Optional[str] = None,
    salt: Optional[str] = None,
    backend: str = DEFAULT_ENTROPY_BACKEND,
) -> PRNG:
    """Build the named generator from a hex seed, a passphrase, or entropy.

    Args:
        name: Registered generator name (see ``unirand.generators.GENERATORS``).
        seed: Hex-encoded seed of exactly the generator's state size.
        passphrase: Passphrase for Argon2id-derived state; requires ``salt``.
        salt: Salt text used with ``passphrase``.
        backend: Entropy backend used when neither seed nor passphrase is given.
    """
    cls = generator_class(name)
    if seed is not None and passphrase is not None:
        raise ValueError("--seed and --passphrase are mutually exclusive")
    if seed is not None:
        try:
            raw = bytes.fromhex(seed)
        except ValueError:
            raise ValueError("--seed must be hexadecimal") from None
        return cls.from_seed(raw)
    if passphrase is not None:
        if salt is None:
            raise ValueError("--passphrase requires --salt")
        return cls.from_passphrase(passphrase, salt.encode("utf-8"))
    return cls.from_entropy(select_entropy_source(backend), required=True)


def _emit(values: Iterable, as_json: bool) -> None:
    if as_json:
        print(_json.dumps(list(values)))
        return
    for v in values:
        print(v)


def cmd_entropy(byte_count: int, *, backend: str = DEFAULT_ENTROPY_BACKEND) -> str:
    """Print ``byte_count`` secure bytes as hex."""
    source = select_entropy_source(backend)
    data = source.fetch(byte_count)
    if data is None:
        raise EntropyUnavailableError(f"{backend} entropy backend could not supply {byte_count} bytes")
    print(data.hex())
    return data.hex()


def cmd_raw(gen: PRNG, *, count: int = 1, as_json: bool = False) -> List[int]:
    """Print ``count`` native draws of ``gen``."""
    if count < 0:
        raise ValueError("--count must be non-negative")
    values = list(islice(gen, count))
    _emit(values, as_json)
    return values


def cmd_int(
    gen: PRNG,
    *,
    type_name: str = DEFAULT_INTEGER_TYPE,
    a: Optional[int] = None,
    b: Optional[int] = None,
    count: int = 1,
    as_json: bool = False,
) -> List[int]:
    """Print ``count`` uniform integers of the named type over ``[a, b]``."""
    kind = integer_type(type_name)
    values = list(gen.uniform(kind, a, b, count=count))
    _emit(values, as_json)
    return values


def cmd_float(
    gen: PRNG,
    *,
    type_name: str = DEFAULT_FLOAT_TYPE,
    a: Optional[float] = None,
    b: Optional[float] = None,
    bits: Optional[int] = None,
    count: int = 1,
    as_json: bool = False,
) -> List[float]:
    """Print ``count`` uniform floats of the named type over ``[a, b)``.

    ``bits`` limits the precision of each value (default: full significand).
    """
    kind = float_type(type_name)
    values = list(gen.uniform(kind, a, b, count=count, bit_count=bits))
    _emit(values, as_json)
    return values


def _add_generator_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--generator",
        "-g",
        choices=sorted(GENERATORS),
        default=DEFAULT_GENERATOR,
        help=f"Generator algorithm (default: {DEFAULT_GENERATOR})",
    )
    p.add_argument("--seed", help="Hex seed (exactly the generator's state size)")
    p.add_argument("--passphrase", help="Derive the seed from a passphrase (Argon2id)")
    p.add_argument("--salt", help="Salt for --passphrase (at least 8 bytes)")
    p.add_argument(
        "--backend",
        choices=[ENTROPY_BACKEND_DEVICE, ENTROPY_BACKEND_CRYPTO],
        default=DEFAULT_ENTROPY_BACKEND,
        help="Entropy backend when no seed or passphrase is given",
    )
    p.add_argument("--count", "-n", type=int, default=1, help="Number of values (default 1)")
    p.add_argument("--json", action="store_true", help="Emit a JSON array")


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="unirand",
        description="Uniform random numbers from seeded generators",
        epilog="Without --seed or --passphrase, generators are seeded from OS entropy.",
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_entropy = sub.add_parser("entropy", help="Print secure random bytes as hex")
    ap_entropy.add_argument("bytes", type=int, help="Number of bytes")
    ap_entropy.add_argument(
        "--backend",
        choices=[ENTROPY_BACKEND_DEVICE, ENTROPY_BACKEND_CRYPTO],
        default=DEFAULT_ENTROPY_BACKEND,
        help=f"Entropy backend (default: {DEFAULT_ENTROPY_BACKEND})",
    )

    ap_raw = sub.add_parser("raw", help="Native generator output")
    _add_generator_args(ap_raw)

    ap_int = sub.add_parser("int", help="Uniform integers over [a, b]")
    _add_generator_args(ap_int)
    ap_int.add_argument("--type", "-t", dest="type_name", choices=sorted(INTEGER_TYPES), default=DEFAULT_INTEGER_TYPE)
    ap_int.add_argument("--a", type=int, help="Lower bound (inclusive)")
    ap_int.add_argument("--b", type=int, help="Upper bound (inclusive)")

    ap_float = sub.add_parser("float", help="Uniform floats over [a, b)")
    _add_generator_args(ap_float)
    ap_float.add_argument("--type", "-t", dest="type_name", choices=sorted(FLOAT_TYPES), default=DEFAULT_FLOAT_TYPE)
    ap_float.add_argument("--a", type=float, help="Lower bound (inclusive, default 0)")
    ap_float.add_argument("--b", type=float, help="Upper bound (exclusive, default 1)")
    ap_float.add_argument("--bits", type=int, help="Bits of precision (default: full significand)")

    args = ap.parse_args(argv)
    try:
        if args.cmd == "entropy":
            cmd_entropy(args.bytes, backend=args.backend)
            return
        gen = _make_generator(
            args.generator,
            seed=args.seed,
            passphrase=args.passphrase,
            salt=args.salt,
            backend=args.backend,
        )
        if args.cmd == "raw":
            cmd_raw(gen, count=args.count, as_json=args.json)
        elif args.cmd == "int":
            cmd_int(gen, type_name=args.type_name, a=args.a, b=args.b, count=args.count, as_json=args.json)
        elif args.cmd == "float":
            cmd_float(
                gen,
                type_name=args.type_name,
                a=args.a,
                b=args.b,
                bits=args.bits,
                count=args.count,
                as_json=args.json,
            )
        else:
            raise RuntimeError("Unknown command")
    except (UnirandError, TypeError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
