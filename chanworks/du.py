"""Report the number and total size of the files below directory trees."""

from __future__ import annotations

import argparse
import os
import sys
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

# Limits how many directories are read at once.
_sema = threading.BoundedSemaphore(20)

_TICK = 0.5


@dataclass
class Usage:
    """File count and total size in bytes found below one root."""

    root: str
    files: int = 0
    size: int = 0


def dirents(directory: str) -> list[os.DirEntry]:
    """Return the entries of ``directory``; on error report it and return []."""
    with _sema:
        try:
            with os.scandir(directory) as entries:
                return list(entries)
        except OSError as exc:
            print(f"du: {exc}", file=sys.stderr)
            return []


def _cancelled(cancel: threading.Event | None) -> bool:
    return cancel is not None and cancel.is_set()


def walk_dir(directory: str, cancel: threading.Event | None = None) -> Iterator[int]:
    """Yield the size of every file in the tree rooted at ``directory``.

    Symbolic links are not followed. Stops early once ``cancel`` is set.
    """
    if _cancelled(cancel):
        return
    for entry in dirents(directory):
        if _cancelled(cancel):
            return
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            size = None if is_dir else entry.stat(follow_symlinks=False).st_size
        except OSError as exc:
            print(f"du: {exc}", file=sys.stderr)
            continue
        if size is None:
            yield from walk_dir(os.path.join(directory, entry.name), cancel)
        else:
            yield size


def _measure(
    usage: Usage, cancel: threading.Event | None, lock: threading.Lock
) -> None:
    for size in walk_dir(usage.root, cancel):
        with lock:
            usage.files += 1
            usage.size += size


def _measure_all(
    usages: list[Usage], cancel: threading.Event | None, lock: threading.Lock
) -> None:
    threads = [
        threading.Thread(target=_measure, args=(usage, cancel, lock), daemon=True)
        for usage in usages
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def disk_usage(
    roots: Iterable[str], cancel: threading.Event | None = None
) -> list[Usage]:
    """Walk every root in parallel and return one Usage per root, in order."""
    usages = [Usage(root) for root in roots]
    _measure_all(usages, cancel, threading.Lock())
    return usages


def format_usage(usage: Usage) -> str:
    """Format ``usage`` as one line of the report."""
    return f"{usage.files:10d} files  {usage.size / 1e9:.3f} GB under {usage.root}"


def _print_usages(usages: list[Usage], lock: threading.Lock) -> None:
    with lock:
        lines = [format_usage(usage) for usage in usages]
    for line in lines:
        print(line, flush=True)


def main(argv: list[str] | None = None) -> int:
    """Print disk usage for the given roots; Ctrl-C cancels the walk."""
    parser = argparse.ArgumentParser(prog="du")
    parser.add_argument("-v", action="store_true", help="show verbose progress messages")
    parser.add_argument("roots", nargs="*")
    args = parser.parse_args(argv)

    usages = [Usage(root) for root in (args.roots or ["."])]
    cancel = threading.Event()
    lock = threading.Lock()
    worker = threading.Thread(target=_measure_all, args=(usages, cancel, lock), daemon=True)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(_TICK)
            if args.v and worker.is_alive():
                _print_usages(usages, lock)
    except KeyboardInterrupt:
        cancel.set()
        worker.join()
        return 0
    _print_usages(usages, lock)
    return 0