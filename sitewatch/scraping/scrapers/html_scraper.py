"""
HTML scraper driven by CSS selectors.
"""

from __future__ import annotations

import requests
from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from sitewatch.domain import Resource
from sitewatch.errors import ExtractionError
from sitewatch.scraping.base import ScraperBase


class HTMLScraper(ScraperBase):
    """
    Scraper returning the combined text of every node matching the selector.

    A selector that matches nothing yields an empty string.
    """

    kind = "html"
    default_timeout_seconds = 5.0

    def extract(self, *, resource: Resource, response: requests.Response) -> str:
        try:
            soup = BeautifulSoup(response.text, "html.parser")
        except Exception as exc:
            raise ExtractionError(f"{resource.url}: unable to parse HTML: {exc}") from exc

        try:
            nodes = soup.select(resource.selector.value)
        except (SelectorSyntaxError, ValueError) as exc:
            raise ExtractionError(
                f"{resource.url}: invalid selector {resource.selector.value!r}: {exc}"
            ) from exc
        return "".join(node.get_text() for node in nodes)
