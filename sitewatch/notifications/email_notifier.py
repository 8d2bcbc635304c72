"""
Email notifier.

Sends through SMTP when a host is configured, otherwise prints the message
with its recipient so runs stay usable without mail credentials.
"""

from __future__ import annotations

import logging
import smtplib
from email.mime.text import MIMEText

from sitewatch.config import SMTPSettings
from sitewatch.errors import NotificationError
from sitewatch.logging_utils import log_event
from sitewatch.notifications.base import NotifierBase

logger = logging.getLogger(__name__)

SUBJECT = "sitewatch: threshold reached"


class EmailNotifier(NotifierBase):
    kind = "email"

    def __init__(self, address: str, smtp: SMTPSettings | None = None) -> None:
        self.address = address
        self.smtp = smtp or SMTPSettings()

    def deliver(self, message: bytes) -> int:
        body = message.decode("utf-8", errors="replace")
        if not self.smtp.enabled:
            print("Sending email to", self.address)
            print(body)
            return len(message)

        if not self.address:
            raise NotificationError("email notification has no recipient address")

        self._send(body)
        log_event(logger, logging.INFO, "email_sent", recipient=self.address)
        return len(message)

    def _send(self, body: str) -> None:
        mime = MIMEText(body, "plain", "utf-8")
        mime["From"] = self.smtp.sender or self.smtp.username or self.address
        mime["To"] = self.address
        mime["Subject"] = SUBJECT

        try:
            with smtplib.SMTP(
                self.smtp.host,
                self.smtp.port,
                timeout=self.smtp.timeout_seconds,
            ) as server:
                server.starttls()
                if self.smtp.username and self.smtp.password:
                    server.login(self.smtp.username, self.smtp.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP delivery to {self.address} failed: {exc}") from exc
