"""Memoizing caches for slow functions, safe for concurrent use."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable, Iterable, Iterator
from typing import Any

import requests

logger = logging.getLogger(__name__)

Func = Callable[[str], Any]

_CLOSE = object()


class _Entry:
    """One cache slot; ``ready`` is set once the result is known."""

    __slots__ = ("ready", "value", "error")

    def __init__(self) -> None:
        self.ready = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None

    def call(self, func: Func, key: str) -> None:
        try:
            self.value = func(key)
        except Exception as exc:  # cached and re-raised to every caller
            self.error = exc
        finally:
            self.ready.set()

    def deliver(self, response: queue.Queue) -> None:
        self.ready.wait()
        response.put(self)

    def result(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class Memo:
    """Caches the results of ``func``; concurrent calls for one key share a single call."""

    def __init__(self, func: Func) -> None:
        self._func = func
        self._lock = threading.Lock()
        self._cache: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """Return ``func(key)``, calling it at most once per key.

        An exception raised by ``func`` is cached and raised again on later calls.
        """
        with self._lock:
            entry = self._cache.get(key)
            owner = entry is None
            if owner:
                entry = _Entry()
                self._cache[key] = entry
        if owner:
            entry.call(self._func, key)
        else:
            entry.ready.wait()
        return entry.result()


class MemoServer:
    """A memo whose cache is confined to a single monitor thread."""

    def __init__(self, func: Func) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._closed = False
        self._thread = threading.Thread(target=self._serve, args=(func,), daemon=True)
        self._thread.start()

    def get(self, key: str) -> Any:
        """Return ``func(key)``, calling it at most once per key."""
        if self._closed:
            raise RuntimeError("memo is closed")
        response: queue.Queue = queue.Queue(maxsize=1)
        self._requests.put((key, response))
        entry: _Entry = response.get()
        return entry.result()

    def close(self) -> None:
        """Stop the monitor thread; later calls to ``get`` raise RuntimeError."""
        if not self._closed:
            self._closed = True
            self._requests.put(_CLOSE)

    def __enter__(self) -> MemoServer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _serve(self, func: Func) -> None:
        cache: dict[str, _Entry] = {}
        while (request := self._requests.get()) is not _CLOSE:
            key, response = request
            entry = cache.get(key)
            if entry is None:
                entry = _Entry()
                cache[key] = entry
                threading.Thread(target=entry.call, args=(func, key), daemon=True).start()
            threading.Thread(target=entry.deliver, args=(response,), daemon=True).start()


def http_get_body(url: str) -> bytes:
    """Fetch ``url`` and return the body of the response."""
    with requests.get(url) as response:
        return response.content


_INCOMING = (
    "https://example.com",
    "https://example.org",
    "https://example.net",
    "http://www.example.com",
)


def incoming_urls() -> Iterator[str]:
    """Yield a fixed list of URLs, each of them twice."""
    yield from _INCOMING
    yield from _INCOMING


def _timed_get(memo: Any, url: str) -> tuple[str, int] | None:
    start = time.monotonic()
    try:
        value = memo.get(url)
    except Exception as exc:
        logger.warning("%s", exc)
        return None
    elapsed = time.monotonic() - start
    print(f"{url}, {elapsed:.6f}s, {len(value)} bytes")
    return url, len(value)


def sequential(memo: Any, urls: Iterable[str] | None = None) -> list[tuple[str, int]]:
    """Fetch each URL through ``memo`` in turn; return (url, size) for each success."""
    if urls is None:
        urls = incoming_urls()
    return [result for url in urls if (result := _timed_get(memo, url)) is not None]


def concurrent(memo: Any, urls: Iterable[str] | None = None) -> list[tuple[str, int]]:
    """Fetch every URL through ``memo`` at once; return (url, size) in completion order."""
    if urls is None:
        urls = incoming_urls()
    results: list[tuple[str, int]] = []
    lock = threading.Lock()

    def fetch(url: str) -> None:
        result = _timed_get(memo, url)
        if result is not None:
            with lock:
                results.append(result)

    threads = [threading.Thread(target=fetch, args=(url,)) for url in urls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results