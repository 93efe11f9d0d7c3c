"""A read-write TCP client: stdin goes to the server, the server's output to stdout."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
from typing import BinaryIO

logger = logging.getLogger(__name__)

_CHUNK = 64 * 1024


def must_copy(dst: BinaryIO, src: BinaryIO) -> int:
    """Copy ``src`` to ``dst`` until end of input; return the bytes copied.

    Data is forwarded as soon as it arrives. Read and write errors propagate.
    """
    read = getattr(src, "read1", src.read)
    total = 0
    while chunk := read(_CHUNK):
        dst.write(chunk)
        dst.flush()
        total += len(chunk)
    return total


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"bad address: {address}")
    return host.strip("[]"), int(port)


def _receive(conn: socket.socket, out: BinaryIO) -> None:
    try:
        with conn.makefile("rb") as src:
            must_copy(out, src)
    except (OSError, ValueError) as exc:
        logger.info("%s", exc)
    logger.info("done")


def main(argv: list[str] | None = None) -> int:
    """Connect to a server and copy stdin to it and its replies to stdout."""
    parser = argparse.ArgumentParser(prog="netcat")
    parser.add_argument("address", nargs="?", default="localhost:8000", help="HOST:PORT")
    args = parser.parse_args(argv)
    try:
        address = _split_address(args.address)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2
    try:
        conn = socket.create_connection(address)
    except OSError as exc:
        logger.error("%s", exc)
        return 1

    stdout, stdin = sys.stdout.buffer, sys.stdin.buffer
    with conn:
        receiver = threading.Thread(target=_receive, args=(conn, stdout), daemon=True)
        receiver.start()
        try:
            with conn.makefile("wb") as dst:
                must_copy(dst, stdin)
        except OSError as exc:
            logger.error("%s", exc)
            return 1
        try:
            conn.shutdown(socket.SHUT_WR)
        except OSError:
            pass
        receiver.join()
    return 0