"""Extract the links from an HTML page."""

from __future__ import annotations

from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup


def extract_links(document: str | bytes | BeautifulSoup, base_url: str) -> list[str]:
    """Return the href of every <a> element in ``document``, resolved against ``base_url``.

    Hrefs that cannot be parsed as URLs are skipped.
    """
    soup = document if isinstance(document, BeautifulSoup) else BeautifulSoup(document, "html.parser")
    links = []
    for anchor in soup.find_all("a", href=True):
        try:
            links.append(urljoin(base_url, anchor["href"]))
        except ValueError:
            continue
    return links


def extract(url: str) -> list[str]:
    """Fetch ``url``, parse it as HTML and return the links it holds.

    Relative links are resolved against the final URL after redirects.
    Raises requests.HTTPError when the server does not answer 200 OK.
    """
    with requests.get(url) as response:
        if response.status_code != 200:
            raise requests.HTTPError(
                f"getting {url}: {response.status_code} {response.reason}",
                response=response,
            )
        return extract_links(response.content, response.url)