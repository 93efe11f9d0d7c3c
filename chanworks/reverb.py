"""An echo server that shouts each line back, then fades it out."""

from __future__ import annotations

import argparse
import logging
import queue
import socket
import threading
import time
from typing import Protocol

logger = logging.getLogger(__name__)


class _Writer(Protocol):
    def write(self, text: str) -> object: ...


class _SocketWriter:
    """Writes whole lines to a socket, one thread at a time, ignoring errors."""

    def __init__(self, conn: socket.socket) -> None:
        self._conn = conn
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        with self._lock:
            try:
                self._conn.sendall(text.encode("utf-8", "surrogateescape"))
            except OSError:
                pass


def echo(writer: _Writer, shout: str, delay: float = 1.0) -> None:
    """Write ``shout`` upper case, as is, then lower case, ``delay`` seconds apart."""
    writer.write(f"\t {shout.upper()}\n")
    time.sleep(delay)
    writer.write(f"\t {shout}\n")
    time.sleep(delay)
    writer.write(f"\t {shout.lower()}\n")


def _scan(conn: socket.socket, lines: queue.Queue) -> None:
    try:
        with conn.makefile("rb") as stream:
            for raw in stream:
                line = raw.decode("utf-8", "surrogateescape")
                if line.endswith("\n"):
                    line = line[:-1]
                lines.put(line.removesuffix("\r"))
    except (OSError, ValueError) as exc:
        logger.info("scan: %s", exc)
    finally:
        lines.put(None)


def handle_conn(conn: socket.socket, delay: float = 1.0, timeout: float | None = 2.0) -> None:
    """Echo every line read from ``conn`` concurrently.

    The connection is closed after ``timeout`` seconds without input (never
    when it is None) or at end of input, once all echoes have finished.
    """
    writer = _SocketWriter(conn)
    lines: queue.Queue = queue.Queue()
    threading.Thread(target=_scan, args=(conn, lines), daemon=True).start()
    echoes: list[threading.Thread] = []
    try:
        while True:
            try:
                line = lines.get(timeout=timeout)
            except queue.Empty:
                break
            if line is None:
                break
            thread = threading.Thread(target=echo, args=(writer, line, delay), daemon=True)
            thread.start()
            echoes.append(thread)
    finally:
        for thread in echoes:
            thread.join()
        try:
            conn.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        conn.close()


def serve(
    host: str = "localhost",
    port: int = 8000,
    delay: float = 1.0,
    timeout: float | None = 2.0,
) -> None:
    """Accept connections forever, handling each one in its own thread."""
    with socket.create_server((host, port)) as listener:
        while True:
            try:
                conn, _ = listener.accept()
            except OSError as exc:
                logger.warning("%s", exc)
                continue
            threading.Thread(
                target=handle_conn, args=(conn, delay, timeout), daemon=True
            ).start()


def main(argv: list[str] | None = None) -> int:
    """Run the reverb server."""
    parser = argparse.ArgumentParser(prog="reverb")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--delay", type=float, default=1.0, help="seconds between echoes")
    parser.add_argument(
        "--timeout", type=float, default=2.0, help="idle seconds before disconnect; 0 disables"
    )
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port, args.delay, args.timeout or None)
    except OSError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        pass
    return 0