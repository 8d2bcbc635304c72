"""
Shared fakes for scraper and notifier capabilities.
"""

from __future__ import annotations

import json
import threading
from collections.abc import Callable

import pytest
import requests

from sitewatch.domain import NotificationSettings, Resource, Selector, Subscription
from sitewatch.notifications import NotifierBase
from sitewatch.scraping import ScraperBase


class StaticScraper(ScraperBase):
    """Returns canned values per resource id without touching the network."""

    kind = "static"

    def __init__(
        self,
        values: dict[str, str] | None = None,
        *,
        error: Exception | None = None,
        on_scrape: Callable[[Resource], None] | None = None,
    ) -> None:
        super().__init__(session=requests.Session())
        self.values = values or {}
        self.error = error
        self.on_scrape = on_scrape
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def scrape(self, resource: Resource) -> str:
        with self._lock:
            self.calls.append(resource.id)
        if self.on_scrape is not None:
            self.on_scrape(resource)
        if self.error is not None:
            raise self.error
        return self.values.get(resource.id, "")

    def extract(self, *, resource: Resource, response: requests.Response) -> str:
        raise NotImplementedError


class RecordingNotifier(NotifierBase):
    kind = "recording"

    def __init__(self, *, fail_with: Exception | None = None) -> None:
        self.messages: list[bytes] = []
        self.fail_with = fail_with

    def deliver(self, message: bytes) -> int:
        if self.fail_with is not None:
            raise self.fail_with
        self.messages.append(message)
        return len(message)


class FakeResponse:
    def __init__(self, *, status_code: int = 200, text: str = "", reason: str = "OK") -> None:
        self.status_code = status_code
        self.text = text
        self.reason = reason

    def json(self) -> object:
        return json.loads(self.text)


class FakeSession:
    """Minimal stand-in for requests.Session recording GET calls."""

    def __init__(
        self,
        response: FakeResponse | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls: list[dict[str, object]] = []

    def get(self, url: str, **kwargs: object) -> FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def make_resource(
    resource_id: str = "r1",
    *,
    scraping_type: str = "static",
    selector: str = "price",
    name: str | None = None,
    json_key: str = "",
) -> Resource:
    return Resource(
        id=resource_id,
        url=f"https://example.com/{resource_id}",
        name=name or f"Resource {resource_id}",
        scraping_type=scraping_type,
        selector=Selector(value=selector),
        json_key=json_key,
    )


def make_subscription(
    subscription_id: str = "s1",
    *,
    resource_id: str = "r1",
    threshold: str = "",
    notification_type: str = "",
    address: str = "",
) -> Subscription:
    return Subscription(
        id=subscription_id,
        resource_id=resource_id,
        threshold=threshold,
        notification=NotificationSettings(type=notification_type, address=address),
    )


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
