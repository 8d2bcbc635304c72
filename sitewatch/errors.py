"""
Exceptions raised while scraping resources and delivering notifications.
"""

from __future__ import annotations


class SitewatchError(Exception):
    """Base exception for watch run failures."""


class FetchError(SitewatchError):
    """Raised when a resource cannot be fetched over the network."""


class HTTPStatusError(FetchError):
    """Raised when a resource responds with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"status code error: {status_code} {reason}".rstrip())


class ExtractionError(SitewatchError):
    """Raised when a response body cannot be parsed for extraction."""


class UnsupportedBackendError(SitewatchError):
    """Raised when a resource names a scraping backend with no registered scraper."""


class UnknownResourceError(SitewatchError):
    """Raised when a subscription references a resource id that does not exist."""


class NotificationError(SitewatchError):
    """Raised when a notifier fails to deliver a message."""


class UnsupportedNotifierError(SitewatchError):
    """Raised when a subscription names a notification kind with no registered notifier."""


class ConfigError(SitewatchError):
    """Raised when resource or subscription files are structurally invalid."""
