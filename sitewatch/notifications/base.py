"""
Notifier capability interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class NotifierBase(ABC):
    """
    Delivery channel for threshold notifications.
    """

    kind: str = ""

    @abstractmethod
    def deliver(self, message: bytes) -> int:
        """
        Deliver `message` and return the number of bytes written.

        Raises NotificationError when delivery fails.
        """
