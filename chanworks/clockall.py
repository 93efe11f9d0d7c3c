"""Watch several clock servers at once, printing every time each one sends."""

from __future__ import annotations

import argparse
import contextlib
import logging
import socket
import sys
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TextIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Clock:
    """A named clock server at ``host`` (HOST:PORT)."""

    name: str
    host: str

    def watch(self, reader: Iterable[str], writer: TextIO) -> None:
        """Copy each line from ``reader`` to ``writer``, prefixed with the clock's name."""
        try:
            for line in reader:
                if line.endswith("\n"):
                    line = line[:-1]
                writer.write(f"{self.name}: {line.removesuffix(chr(13))}\n")
                writer.flush()
        except (OSError, ValueError) as exc:
            logger.warning("can't read from %s: %s", self.name, exc)
        print(self.name, "done")


def parse_clocks(args: Iterable[str]) -> list[Clock]:
    """Parse NAME=HOST arguments; raise ValueError for any other form."""
    clocks = []
    for arg in args:
        fields = arg.split("=")
        if len(fields) != 2:
            raise ValueError(f"bad args: {arg}")
        clocks.append(Clock(fields[0], fields[1]))
    return clocks


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"bad address: {address}")
    return host.strip("[]"), int(port)


def _watch_conn(clock: Clock, conn: socket.socket, writer: TextIO) -> None:
    with conn.makefile("r", encoding="utf-8", errors="replace") as stream:
        clock.watch(stream, writer)


def main(argv: list[str] | None = None) -> int:
    """Connect to every clock given as NAME=HOST and print what each one says."""
    parser = argparse.ArgumentParser(prog="clockall")
    parser.add_argument("clocks", nargs="*", metavar="NAME=HOST")
    args = parser.parse_args(argv)
    if not args.clocks:
        print("usage: clockall NAME=HOST ...", file=sys.stderr)
        return 1
    try:
        clocks = parse_clocks(args.clocks)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    writer = sys.stderr
    with contextlib.ExitStack() as stack:
        watchers = []
        for clock in clocks:
            try:
                conn = socket.create_connection(_split_address(clock.host))
            except (OSError, ValueError) as exc:
                logger.error("%s: %s", clock.host, exc)
                return 1
            stack.enter_context(conn)
            watcher = threading.Thread(
                target=_watch_conn, args=(clock, conn, writer), daemon=True
            )
            watcher.start()
            watchers.append(watcher)
        try:
            for watcher in watchers:
                watcher.join()
        except KeyboardInterrupt:
            pass
    return 0