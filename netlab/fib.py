"""Fibonacci numbers from Binet's closed form."""

from __future__ import annotations

import argparse
import math
from typing import Sequence

_SQRT5 = math.sqrt(5)
_PHI = (1 + _SQRT5) / 2


def fib(n: int) -> int:
    """Return the n-th Fibonacci number, rounding phi**n / sqrt(5)."""
    return math.floor(_PHI**n / _SQRT5 + 0.5)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="netlab-fib", description="Print a Fibonacci number."
    )
    parser.add_argument("n", type=int, nargs="?", default=9, help="index (default 9)")
    args = parser.parse_args(argv)
    print(fib(args.n))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())