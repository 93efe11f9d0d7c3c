"""Mirror a web site to local files, rewriting local links to be relative."""

from __future__ import annotations

import argparse
import logging
import os
import posixpath
import sys
import threading
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_WORKERS = 20
_CHUNK = 64 * 1024


def _host(url: str) -> str:
    return urlsplit(url).netloc.rpartition("@")[2]


def _ext(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _local_anchors(soup: BeautifulSoup, base: str, log_errors: bool):
    base_host = _host(base)
    for anchor in soup.find_all("a", href=True):
        try:
            link = urljoin(base, anchor["href"])
        except ValueError as exc:
            if log_errors:
                logger.warning("skipping %r: %s", anchor["href"], exc)
            continue
        if _host(link) == base_host:
            yield anchor, link


def link_urls(soup: BeautifulSoup, base: str) -> list[str]:
    """Return the links in ``soup`` that point to the same host as ``base``."""
    return [link for _, link in _local_anchors(soup, base, log_errors=True)]


def rewrite_local_links(soup: BeautifulSoup, base: str) -> None:
    """Rewrite local links in ``soup`` in place to the form /PATH?QUERY#FRAGMENT."""
    for anchor, link in _local_anchors(soup, base, log_errors=False):
        parts = urlsplit(link)
        anchor["href"] = urlunsplit(("", "", parts.path, parts.query, parts.fragment))


def local_filename(url: str, directory: str = ".") -> str:
    """Return where ``url`` is stored below ``directory``.

    The path is HOST/PATH; a path whose last element has no extension gets
    an index.html inside it.
    """
    raw_path = urlsplit(url).path
    clean = posixpath.normpath("/" + raw_path.lstrip("/"))
    segments = [segment for segment in clean.split("/") if segment]
    if _ext(raw_path) == "":
        segments.append("index.html")
    return os.path.join(directory, _host(url), *segments)


class Mirror:
    """Crawls a site from its base URL and saves every local page it reaches."""

    def __init__(
        self,
        base: str,
        max_depth: int = 3,
        directory: str = ".",
        session: requests.Session | None = None,
    ) -> None:
        self.base = base
        self.max_depth = max_depth
        self.directory = directory
        self._host = _host(base)
        self._session = requests.Session() if session is None else session
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Abort requests in flight and stop following links."""
        self._cancelled.set()

    def _check_cancelled(self) -> None:
        if self._cancelled.is_set():
            raise RuntimeError("request cancelled")

    def _read(self, response: requests.Response) -> bytes:
        chunks = []
        for chunk in response.iter_content(chunk_size=_CHUNK):
            self._check_cancelled()
            chunks.append(chunk)
        return b"".join(chunks)

    def visit(self, url: str) -> list[str]:
        """Fetch ``url``, save it if local, and return the local links of an HTML page.

        Raises requests.HTTPError on a status other than 200 OK and
        RuntimeError once the mirror has been cancelled.
        """
        print(url)
        self._check_cancelled()
        with self._session.get(url, stream=True) as response:
            if response.status_code != 200:
                raise requests.HTTPError(
                    f"GET {url}: {response.status_code} {response.reason}",
                    response=response,
                )
            page = urljoin(self.base, url)
            if _host(page) != self._host:
                logger.info("not saving %s: non-local", url)
                return []
            body = self._read(response)
            urls: list[str] = []
            if "text/html" in response.headers.get("Content-Type", ""):
                soup = BeautifulSoup(body, "html.parser")
                urls = link_urls(soup, page)  # before the links are rewritten
                rewrite_local_links(soup, page)
                body = soup.encode()
            self.save(response.url, body)
        return urls

    def save(self, url: str, body: bytes) -> str:
        """Write ``body`` to the local file for ``url`` and return its name."""
        filename = local_filename(url, self.directory)
        os.makedirs(os.path.dirname(filename), exist_ok=True)
        print("filename:", filename)
        with open(filename, "wb") as file:
            try:
                file.write(body)
            except OSError as exc:
                logger.warning("save: %s", exc)
        return filename

    def _visit_logged(self, url: str) -> list[str] | None:
        try:
            return self.visit(url)
        except Exception as exc:
            logger.warning("visit %s: %s", url, exc)
            return None

    def run(self, roots: Iterable[str]) -> list[str]:
        """Mirror everything reachable from ``roots``; return the URLs visited successfully.

        Roots are at depth 1, and links are followed below ``max_depth``.
        """
        visited: list[str] = []
        seen: set[str] = set()
        pending: dict[Future, tuple[str, int]] = {}
        pool = ThreadPoolExecutor(max_workers=_WORKERS)

        def submit(url: str, depth: int) -> None:
            seen.add(url)
            pending[pool.submit(self._visit_logged, url)] = (url, depth)

        try:
            for url in roots:
                if url not in seen:
                    submit(url, 1)
            while pending:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    url, depth = pending.pop(future)
                    found = future.result()
                    if found is None:
                        continue
                    visited.append(url)
                    if depth >= self.max_depth or self._cancelled.is_set():
                        continue
                    for link in found:
                        if link not in seen:
                            submit(link, depth + 1)
        finally:
            pool.shutdown(wait=True, cancel_futures=True)
        return visited


def main(argv: list[str] | None = None) -> int:
    """Mirror the sites given on the command line; Ctrl-C cancels."""
    parser = argparse.ArgumentParser(prog="mirror")
    parser.add_argument("-d", dest="depth", type=int, default=3, help="max crawl depth")
    parser.add_argument("urls", nargs="*")
    args = parser.parse_args(argv)
    if not args.urls:
        print("usage: mirror URL ...", file=sys.stderr)
        return 1

    mirror = Mirror(args.urls[0], args.depth)
    worker = threading.Thread(target=mirror.run, args=(args.urls,), daemon=True)
    worker.start()
    try:
        while worker.is_alive():
            worker.join(0.2)
    except KeyboardInterrupt:
        mirror.cancel()
    return 0