"""
sitewatch/domain.py

Records flowing through a watch run: resources, subscriptions, work items
and outcomes.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitewatch.notifications.base import NotifierBase
    from sitewatch.scraping.base import ScraperBase


@dataclass(frozen=True)
class Selector:
    """
    Extraction path for a resource.

    `type`, `threshold` and `frequency` are carried from the resource file
    but not interpreted.
    """

    value: str = ""
    type: str = ""
    threshold: str = ""
    frequency: str = ""


@dataclass(frozen=True)
class Resource:
    """
    One monitored URL plus how to extract a value from it.
    """

    id: str = ""
    url: str = ""
    name: str = ""
    scraping_type: str = ""
    selector: Selector = Selector()
    json_key: str = ""
    real_browser: bool = False

    @classmethod
    def placeholder(cls) -> Resource:
        return cls()

    @property
    def is_placeholder(self) -> bool:
        return self == Resource()


class ResourceCatalog:
    """
    Read-only lookup of resources by id.
    """

    def __init__(self, resources: Iterable[Resource]) -> None:
        self._by_id: dict[str, Resource] = {}
        for resource in resources:
            # First definition wins for duplicated ids.
            self._by_id.setdefault(resource.id, resource)

    def __len__(self) -> int:
        return len(self._by_id)

    def contains(self, resource_id: str) -> bool:
        return resource_id in self._by_id

    def get_by_id(self, resource_id: str) -> Resource:
        """
        Return the resource with `resource_id`, or the empty placeholder.
        """

        return self._by_id.get(resource_id, Resource.placeholder())


@dataclass(frozen=True)
class NotificationSettings:
    """
    Notification channel selection for one subscription.
    """

    type: str = ""
    address: str = ""


@dataclass(frozen=True)
class Subscription:
    """
    Watcher binding a resource to a threshold and a notification channel.
    """

    id: str
    resource_id: str
    threshold: str = ""
    frequency: str = ""
    notification: NotificationSettings = NotificationSettings()


@dataclass(frozen=True)
class WorkItem:
    """
    One unit of dispatched scrape work.
    """

    subscription: Subscription
    resource: Resource
    scraper: ScraperBase | None
    notifier: NotifierBase | None = None
    resource_missing: bool = False


@dataclass(frozen=True)
class Outcome:
    """
    Result of executing one work item: an extracted value or an error.
    """

    subscription: Subscription
    resource: Resource
    notifier: NotifierBase | None = None
    value: str = ""
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ProcessingResult(str, Enum):
    """
    Decision taken by the result processor for one outcome.
    """

    SCRAPE_FAILED = "scrape_failed"
    NO_THRESHOLD = "no_threshold"
    BELOW_THRESHOLD = "below_threshold"
    INVALID_THRESHOLD = "invalid_threshold"
    NOTIFIED = "notified"
    LOGGED = "logged"
    NOTIFICATION_FAILED = "notification_failed"


@dataclass(frozen=True)
class RunSummary:
    """
    Totals for one completed watch run.
    """

    dispatched: int
    completed: int
    succeeded: int
    failed: int
    notified: int
    results: dict[str, ProcessingResult] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        return {
            "dispatched": self.dispatched,
            "completed": self.completed,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "notified": self.notified,
            "results": {key: value.value for key, value in self.results.items()},
        }
