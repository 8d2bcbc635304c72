"""
Base scraper abstraction for resource value extraction.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

import requests

from sitewatch.domain import Resource
from sitewatch.errors import FetchError, HTTPStatusError
from sitewatch.logging_utils import log_event

logger = logging.getLogger(__name__)


class ScraperBase(ABC):
    """
    Base class implementing one bounded, non-retrying fetch per scrape.

    Subclasses turn the fetched response into the extracted string value.
    """

    kind: str = ""
    default_timeout_seconds: float = 5.0

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout_seconds: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds or self.default_timeout_seconds
        self.request_headers = {"User-Agent": user_agent} if user_agent else {}

    def scrape(self, resource: Resource) -> str:
        """
        Fetch `resource.url` and return the value its selector extracts.

        Raises FetchError, HTTPStatusError or ExtractionError.
        """

        response = self._fetch(resource.url)
        value = self.extract(resource=resource, response=response)
        log_event(
            logger,
            logging.DEBUG,
            "resource_scraped",
            resource_id=resource.id,
            scraper=self.kind,
            url=resource.url,
        )
        return value

    @abstractmethod
    def extract(self, *, resource: Resource, response: requests.Response) -> str:
        """
        Extract the selected value from a successful response.
        """

    def _fetch(self, url: str) -> requests.Response:
        try:
            response = self.session.get(
                url,
                headers=self.request_headers,
                timeout=self.timeout_seconds,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise FetchError(f"GET {url!r} failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise HTTPStatusError(response.status_code, response.reason or "")
        return response
