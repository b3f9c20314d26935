from __future__ import annotations

import contextlib
import io
import json
import unittest
from typing import List, Tuple

from unirand.cli import main

_SEED16 = "000102030405060708090a0b0c0d0e0f"
_SEED32 = _SEED16 * 2


def _run(argv: List[str]) -> Tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    code = 0
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as exc:
            code = exc.code if isinstance(exc.code, int) else 1
    return code, out.getvalue(), err.getvalue()


class CliWorkflowTests(unittest.TestCase):
    def test_int_is_reproducible_from_seed(self):
        argv = ["int", "--seed", _SEED16, "--type", "uint8", "--a", "0", "--b", "9", "--count", "20", "--json"]
        code, out, _ = _run(argv)
        self.assertEqual(code, 0)
        values = json.loads(out)
        self.assertEqual(len(values), 20)
        self.assertTrue(all(0 <= v <= 9 for v in values))
        self.assertEqual(_run(argv)[1], out)

    def test_signed_int_lines(self):
        code, out, _ = _run(["int", "-g", "pcg32", "--seed", _SEED16, "-t", "int16", "--a", "-5", "--b", "5", "-n", "8"])
        self.assertEqual(code, 0)
        lines = out.split()
        self.assertEqual(len(lines), 8)
        self.assertTrue(all(-5 <= int(v) <= 5 for v in lines))

    def test_float_defaults_to_unit_interval(self):
        code, out, _ = _run(["float", "--seed", _SEED16, "--count", "50", "--json"])
        self.assertEqual(code, 0)
        values = json.loads(out)
        self.assertTrue(all(0.0 <= v < 1.0 for v in values))

    def test_float_precision(self):
        argv = ["float", "-g", "blake2b", "--seed", _SEED32, "--bits", "8", "--count", "30", "--json"]
        code, out, _ = _run(argv)
        self.assertEqual(code, 0)
        for v in json.loads(out):
            self.assertEqual(v * 256, int(v * 256))

    def test_float_span_wider_than_largest_double(self):
        argv = ["float", "--seed", _SEED16, "--a=-1e308", "--b=1e308", "--count", "20", "--json"]
        code, out, _ = _run(argv)
        self.assertEqual(code, 0)
        self.assertTrue(all(-1e308 <= v < 1e308 for v in json.loads(out)))

    def test_raw(self):
        code, out, _ = _run(["raw", "-g", "chacha20", "--seed", "00" * 32, "--count", "2"])
        self.assertEqual(code, 0)
        self.assertEqual(out.split(), [str(0xADE0B876), str(0x903DF1A0)])

    def test_passphrase_seeding(self):
        argv = ["raw", "--passphrase", "pw", "--salt", "saltsalt", "--count", "3", "--json"]
        first = _run(argv)
        self.assertEqual(first[0], 0)
        self.assertEqual(first, _run(argv))

    def test_entropy_seeded_draw(self):
        code, out, _ = _run(["int", "-t", "uint8", "--a", "1", "--b", "6", "--count", "5", "--json"])
        self.assertEqual(code, 0)
        self.assertTrue(all(1 <= v <= 6 for v in json.loads(out)))

    def test_entropy_hex(self):
        code, out, _ = _run(["entropy", "16", "--backend", "crypto"])
        self.assertEqual(code, 0)
        self.assertEqual(len(bytes.fromhex(out.strip())), 16)

    def test_errors_exit_with_status_2(self):
        cases = [
            ["int", "--seed", _SEED16, "--a", "5", "--b", "1"],
            ["int", "--seed", _SEED16, "--a", "5"],
            ["float", "--seed", _SEED16, "--a", "1", "--b", "1"],
            ["float", "--seed", _SEED16, "--a", "0", "--b", "inf"],
            ["float", "--seed", _SEED16, "-t", "float32", "--a", "0", "--b", "1e39"],
            ["float", "--seed", _SEED16, "--bits", "0"],
            ["int", "--seed", "zz"],
            ["int", "--seed", "00"],
            ["raw", "--passphrase", "pw"],
            ["raw", "--seed", _SEED16, "--passphrase", "pw", "--salt", "saltsalt"],
            ["raw", "--seed", _SEED16, "--count", "-1"],
            ["int", "--seed", _SEED16, "--count", "-1"],
            ["entropy", "-3"],
        ]
        for argv in cases:
            code, out, err = _run(argv)
            self.assertEqual(code, 2, argv)
            self.assertTrue(err.startswith("Error: "), (argv, err))


if __name__ == "__main__":
    unittest.main()
