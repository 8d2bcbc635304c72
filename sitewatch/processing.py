"""
sitewatch/processing.py

Per-outcome decision logic: threshold check and notification routing.
"""

from __future__ import annotations

import logging

from sitewatch.domain import Outcome, ProcessingResult
from sitewatch.logging_utils import log_event
from sitewatch.thresholds import ThresholdError, evaluate

logger = logging.getLogger(__name__)

THRESHOLD_PHRASE = "reached the threshold. The new value is:"


def format_message(resource_name: str, value: str) -> bytes:
    return f"{resource_name} {THRESHOLD_PHRASE} {value}.".encode("utf-8")


class ResultProcessor:
    """
    Handles one completed outcome at a time.

    Errors are terminal for the outcome being processed, never for the run.
    """

    def process(self, outcome: Outcome) -> ProcessingResult:
        subscription = outcome.subscription

        if outcome.error is not None:
            log_event(
                logger,
                logging.ERROR,
                "scrape_failed",
                subscription_id=subscription.id,
                resource_id=subscription.resource_id,
                error_type=type(outcome.error).__name__,
                error=str(outcome.error),
            )
            return ProcessingResult.SCRAPE_FAILED

        # An empty threshold means no check and no notification.
        if not subscription.threshold:
            return ProcessingResult.NO_THRESHOLD

        try:
            reached = evaluate(subscription.threshold, outcome.value)
        except ThresholdError as exc:
            log_event(
                logger,
                logging.ERROR,
                "threshold_invalid",
                subscription_id=subscription.id,
                threshold=subscription.threshold,
                error=str(exc),
            )
            return ProcessingResult.INVALID_THRESHOLD

        if not reached:
            log_event(
                logger,
                logging.DEBUG,
                "threshold_not_reached",
                subscription_id=subscription.id,
                value=outcome.value,
            )
            return ProcessingResult.BELOW_THRESHOLD

        return self._notify(outcome)

    def _notify(self, outcome: Outcome) -> ProcessingResult:
        resource = outcome.resource
        if outcome.notifier is None:
            log_event(
                logger,
                logging.INFO,
                "threshold_reached",
                subscription_id=outcome.subscription.id,
                resource=resource.name,
                value=outcome.value,
            )
            return ProcessingResult.LOGGED

        try:
            written = outcome.notifier.deliver(format_message(resource.name, outcome.value))
        except Exception as exc:
            log_event(
                logger,
                logging.ERROR,
                "notification_failed",
                subscription_id=outcome.subscription.id,
                notifier=outcome.notifier.kind,
                error=str(exc),
            )
            return ProcessingResult.NOTIFICATION_FAILED

        log_event(
            logger,
            logging.INFO,
            "notification_delivered",
            subscription_id=outcome.subscription.id,
            notifier=outcome.notifier.kind,
            bytes_written=written,
        )
        return ProcessingResult.NOTIFIED
