"""
Notification channels and the registry that builds them.
"""

from sitewatch.notifications.base import NotifierBase
from sitewatch.notifications.console import ConsoleNotifier
from sitewatch.notifications.email_notifier import EmailNotifier
from sitewatch.notifications.registry import NotifierRegistry

__all__ = ["ConsoleNotifier", "EmailNotifier", "NotifierBase", "NotifierRegistry"]
