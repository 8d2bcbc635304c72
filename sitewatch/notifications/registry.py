"""
Notifier registry keyed by notification type.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from sitewatch.config import SMTPSettings
from sitewatch.domain import NotificationSettings
from sitewatch.errors import UnsupportedNotifierError
from sitewatch.notifications.base import NotifierBase
from sitewatch.notifications.console import ConsoleNotifier
from sitewatch.notifications.email_notifier import EmailNotifier

NotifierFactory = Callable[[NotificationSettings], NotifierBase]


class NotifierRegistry:
    """
    Builds one notifier per subscription from its notification settings.
    """

    def __init__(self, factories: Mapping[str, NotifierFactory] | None = None) -> None:
        self._factories: dict[str, NotifierFactory] = {}
        for kind, factory in (factories or {}).items():
            self.register(kind=kind, factory=factory)

    @classmethod
    def with_builtins(cls, *, smtp: SMTPSettings | None = None) -> NotifierRegistry:
        return cls(
            {
                "console": lambda settings: ConsoleNotifier(settings.address),
                "email": lambda settings: EmailNotifier(settings.address, smtp=smtp),
            }
        )

    def register(self, *, kind: str, factory: NotifierFactory) -> None:
        self._factories[kind.strip().lower()] = factory

    def resolve(self, settings: NotificationSettings) -> NotifierBase | None:
        """
        Return a notifier for `settings`, or None when no type is set.
        """

        kind = settings.type.strip().lower()
        if not kind:
            return None

        factory = self._factories.get(kind)
        if factory is None:
            allowed = ", ".join(sorted(self._factories))
            raise UnsupportedNotifierError(
                f"Unknown notification type='{settings.type}'. Allowed types: {allowed}."
            )
        return factory(settings)
