"""A concurrent web crawler with a bounded number of fetches in flight."""

from __future__ import annotations

import argparse
import logging
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from chanworks import links

logger = logging.getLogger(__name__)

Extractor = Callable[[str], Iterable[str]]


def _safe_extract(extract: Extractor, url: str) -> list[str]:
    try:
        return list(extract(url))
    except Exception as exc:
        logger.warning("%s", exc)
        return []


def crawl(
    roots: Iterable[str],
    extract: Extractor | None = None,
    max_depth: int | None = None,
    workers: int = 20,
) -> Iterator[tuple[int, str]]:
    """Crawl breadth-first from ``roots``, yielding (depth, url) for each new URL.

    Every URL is yielded once. Roots have depth 0; links of a URL at depth
    ``max_depth`` are not followed. At most ``workers`` extractions run at once.
    A failing extraction is logged and treated as a page without links.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")
    extract = links.extract if extract is None else extract

    seen: set[str] = set()
    batches: deque[tuple[int, list[str]]] = deque([(0, list(roots))])
    pending: dict[Future, int] = {}
    pool = ThreadPoolExecutor(max_workers=workers)
    try:
        while batches or pending:
            while batches:
                depth, urls = batches.popleft()
                for url in urls:
                    if url in seen:
                        continue
                    seen.add(url)
                    yield depth, url
                    if max_depth is None or depth < max_depth:
                        pending[pool.submit(_safe_extract, extract, url)] = depth + 1
            if pending:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    batches.append((pending.pop(future), future.result()))
    finally:
        pool.shutdown(wait=False, cancel_futures=True)


def main(argv: list[str] | None = None) -> int:
    """Crawl the web from the URLs given, printing each URL found."""
    parser = argparse.ArgumentParser(prog="crawl")
    parser.add_argument("-d", "--depth", type=int, default=None, help="max crawl depth")
    parser.add_argument("-w", "--workers", type=int, default=20, help="concurrent fetches")
    parser.add_argument("urls", nargs="+")
    args = parser.parse_args(argv)
    for _, url in crawl(args.urls, links.extract, args.depth, args.workers):
        print(url, flush=True)
    return 0