"""
Scraper registry keyed by resource scraping type.
"""

from __future__ import annotations

from collections.abc import Mapping

import requests

from sitewatch.config import WatchSettings
from sitewatch.scraping.base import ScraperBase
from sitewatch.scraping.scrapers import HTMLScraper, JSONScraper


class ScraperRegistry:
    """
    Lookup table from scraping type to a shared scraper instance.
    """

    def __init__(self, registrations: Mapping[str, ScraperBase] | None = None) -> None:
        self._registrations: dict[str, ScraperBase] = {}
        for kind, scraper in (registrations or {}).items():
            self.register(kind=kind, scraper=scraper)

    @classmethod
    def with_builtins(
        cls,
        *,
        settings: WatchSettings,
        session: requests.Session | None = None,
    ) -> ScraperRegistry:
        session = session or requests.Session()
        return cls(
            {
                "json": JSONScraper(
                    session=session,
                    timeout_seconds=settings.json_timeout_seconds,
                    user_agent=settings.user_agent,
                ),
                "html": HTMLScraper(
                    session=session,
                    timeout_seconds=settings.html_timeout_seconds,
                    user_agent=settings.user_agent,
                ),
            }
        )

    def register(self, *, kind: str, scraper: ScraperBase) -> None:
        self._registrations[kind.strip().lower()] = scraper

    def resolve(self, kind: str) -> ScraperBase | None:
        """
        Return the scraper for `kind`, or None when nothing is registered.
        """

        return self._registrations.get(kind.strip().lower())

    def kinds(self) -> list[str]:
        return sorted(self._registrations)
