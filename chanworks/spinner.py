"""Show a spinner while a slow computation runs."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import TextIO

_FRAMES = "-\\|/"


def fib(x: int) -> int:
    """Return the x-th Fibonacci number, computed the slow recursive way."""
    if x < 2:
        return x
    return fib(x - 1) + fib(x - 2)


def spinner(delay: float, stop: threading.Event, out: TextIO | None = None) -> None:
    """Draw spinner frames every ``delay`` seconds until ``stop`` is set."""
    out = sys.stdout if out is None else out
    while not stop.is_set():
        for frame in _FRAMES:
            out.write(f"\r{frame}")
            out.flush()
            if stop.wait(delay):
                return


def main(argv: list[str] | None = None) -> int:
    """Compute a Fibonacci number while spinning."""
    parser = argparse.ArgumentParser(prog="spinner")
    parser.add_argument("n", type=int, nargs="?", default=45)
    args = parser.parse_args(argv)

    stop = threading.Event()
    thread = threading.Thread(target=spinner, args=(0.1, stop, sys.stdout), daemon=True)
    thread.start()
    try:
        result = fib(args.n)
    finally:
        stop.set()
        thread.join()
    print(f"\rFibonacci({args.n}) = {result}")
    return 0