"""
JSON API scraper driven by dotted selector paths.
"""

from __future__ import annotations

import json
from typing import Any

import requests

from sitewatch.domain import Resource
from sitewatch.errors import ExtractionError
from sitewatch.scraping.base import ScraperBase
from sitewatch.scraping.json_path import lookup, render


class JSONScraper(ScraperBase):
    """
    Scraper for JSON payloads.

    `resource.json_key` narrows the document before `resource.selector.value`
    is applied. A narrowed value holding JSON-encoded text is decoded first.
    """

    kind = "json"
    default_timeout_seconds = 3.0

    def extract(self, *, resource: Resource, response: requests.Response) -> str:
        try:
            document: Any = response.json()
        except ValueError as exc:
            raise ExtractionError(f"{resource.url}: response was not valid JSON.") from exc

        if resource.json_key:
            document = _decode_embedded(lookup(document, resource.json_key))
        return render(lookup(document, resource.selector.value))


def _decode_embedded(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError:
        return value
