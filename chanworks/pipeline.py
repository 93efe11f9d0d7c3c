"""A three-stage pipeline: counter, squarer, printer."""

from __future__ import annotations

import argparse
import itertools
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO


def counter(limit: int | None = None) -> Iterator[int]:
    """Yield 0, 1, 2, ... up to but excluding ``limit``; forever when it is None."""
    return itertools.count() if limit is None else iter(range(limit))


def squarer(values: Iterable[int]) -> Iterator[int]:
    """Yield the square of each value."""
    for value in values:
        yield value * value


def printer(values: Iterable[object], out: TextIO | None = None) -> None:
    """Print each value on its own line."""
    out = sys.stdout if out is None else out
    for value in values:
        print(value, file=out)


def main(argv: list[str] | None = None) -> int:
    """Print the squares of the natural numbers."""
    parser = argparse.ArgumentParser(prog="pipeline")
    parser.add_argument("-n", "--limit", type=int, default=100, help="how many numbers")
    parser.add_argument("--forever", action="store_true", help="never stop")
    args = parser.parse_args(argv)
    printer(squarer(counter(None if args.forever else args.limit)))
    return 0