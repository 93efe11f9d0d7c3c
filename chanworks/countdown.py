"""A rocket launch countdown that can be aborted."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import TextIO


def launch(out: TextIO | None = None) -> None:
    """Announce the launch."""
    print("Lift off!", file=sys.stdout if out is None else out)


def countdown(
    count: int = 10,
    interval: float = 1.0,
    abort: threading.Event | None = None,
    out: TextIO | None = None,
) -> bool:
    """Count down from ``count``, one step per ``interval`` seconds.

    Returns True if the rocket launched, False if ``abort`` was set first.
    """
    out = sys.stdout if out is None else out
    abort = threading.Event() if abort is None else abort
    print("Commencing countdown.  Press return to abort.", file=out)
    for remaining in range(count, 0, -1):
        print(remaining, file=out)
        if abort.wait(interval):
            print("Launch aborted!", file=out)
            return False
    launch(out)
    return True


def _watch_stdin(abort: threading.Event) -> None:
    try:
        sys.stdin.read(1)
    except (OSError, ValueError):
        pass
    abort.set()


def main(argv: list[str] | None = None) -> int:
    """Run the countdown, aborting on any input."""
    parser = argparse.ArgumentParser(prog="countdown")
    parser.add_argument("-n", "--count", type=int, default=10)
    parser.add_argument("-i", "--interval", type=float, default=1.0)
    args = parser.parse_args(argv)

    abort = threading.Event()
    threading.Thread(target=_watch_stdin, args=(abort,), daemon=True).start()
    countdown(args.count, args.interval, abort)
    return 0