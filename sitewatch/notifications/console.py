"""
Console notifier writing messages to standard output.
"""

from __future__ import annotations

from sitewatch.notifications.base import NotifierBase


class ConsoleNotifier(NotifierBase):
    kind = "console"

    def __init__(self, address: str = "") -> None:
        self.address = address

    def deliver(self, message: bytes) -> int:
        print(message.decode("utf-8", errors="replace"))
        return len(message)
