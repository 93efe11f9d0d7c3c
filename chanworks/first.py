"""Fetch several URLs at once and keep only the first response."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

import requests

logger = logging.getLogger(__name__)


def _close_response(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


def fetch_first(
    urls: Iterable[str], session: requests.Session | None = None
) -> requests.Response:
    """GET all ``urls`` concurrently and return the first response to arrive.

    The body is not yet read; close the response when done. Responses that
    arrive later are closed. If every request fails, the last error is raised.
    """
    urls = list(urls)
    if not urls:
        raise ValueError("no URLs given")
    get = requests.get if session is None else session.get

    pool = ThreadPoolExecutor(max_workers=len(urls))
    futures = {pool.submit(get, url, stream=True): url for url in urls}
    winner: Future | None = None
    error: Exception | None = None
    try:
        for future in as_completed(futures):
            try:
                response = future.result()
            except requests.RequestException as exc:
                logger.warning("GET %s: %s", futures[future], exc)
                error = exc
                continue
            winner = future
            return response
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
        for future in futures:
            if future is not winner:
                future.add_done_callback(_close_response)
    assert error is not None
    raise error


def main(argv: list[str] | None = None) -> int:
    """Print the URL and headers of whichever URL answers first."""
    parser = argparse.ArgumentParser(prog="first")
    parser.add_argument("urls", nargs="+")
    args = parser.parse_args(argv)
    try:
        response = fetch_first(args.urls)
    except requests.RequestException as exc:
        logger.error("%s", exc)
        return 1
    with response:
        print(response.url)
        for name, value in response.headers.items():
            print(f"{name}: {value}")
    return 0