"""
sitewatch/pipeline.py

Concurrent dispatch pipeline for one watch run.

Dispatcher (calling thread) -> bounded work queue -> worker pool ->
bounded outcome queue -> single collector -> result processor.

Every dispatched work item yields exactly one outcome, and the run joins
on a per-run completion counter reaching zero.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections import Counter
from collections.abc import Iterable, Sequence

from sitewatch.config import WatchSettings
from sitewatch.domain import (
    Outcome,
    ProcessingResult,
    Resource,
    ResourceCatalog,
    RunSummary,
    Subscription,
    WorkItem,
)
from sitewatch.errors import UnknownResourceError, UnsupportedBackendError, UnsupportedNotifierError
from sitewatch.logging_utils import log_event
from sitewatch.notifications import NotifierBase, NotifierRegistry
from sitewatch.processing import ResultProcessor
from sitewatch.scraping import ScraperRegistry

logger = logging.getLogger(__name__)

_STOP = object()


class CompletionCounter:
    """
    Counts outstanding outcomes and lets a caller block until none remain.
    """

    def __init__(self) -> None:
        self._pending = 0
        self._condition = threading.Condition()

    @property
    def pending(self) -> int:
        with self._condition:
            return self._pending

    def add(self, count: int = 1) -> None:
        with self._condition:
            self._pending += count

    def done(self) -> None:
        with self._condition:
            if self._pending <= 0:
                raise RuntimeError("CompletionCounter.done() called with nothing pending")
            self._pending -= 1
            if self._pending == 0:
                self._condition.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until the counter reaches zero. Returns False on timeout.
        """

        with self._condition:
            return self._condition.wait_for(lambda: self._pending == 0, timeout=timeout)


class _RunState:
    """
    Queues, counter and tallies owned by a single run.
    """

    def __init__(self, *, queue_capacity: int) -> None:
        self.work_queue: queue.Queue = queue.Queue(maxsize=queue_capacity)
        self.outcome_queue: queue.Queue = queue.Queue(maxsize=queue_capacity)
        self.counter = CompletionCounter()
        self.dispatched = 0
        # Written by the collector thread only.
        self.results: dict[str, ProcessingResult] = {}
        self.tally: Counter[ProcessingResult] = Counter()
        self.succeeded = 0
        self.failed = 0


class WatchPipeline:
    """
    Runs every subscription's scrape concurrently and processes the outcomes.
    """

    def __init__(
        self,
        *,
        settings: WatchSettings,
        scrapers: ScraperRegistry,
        notifiers: NotifierRegistry,
        processor: ResultProcessor | None = None,
    ) -> None:
        if settings.worker_count < 1:
            raise ValueError("worker_count must be >= 1")
        self._settings = settings
        self._scrapers = scrapers
        self._notifiers = notifiers
        self._processor = processor or ResultProcessor()

    def run(
        self,
        *,
        resources: Iterable[Resource],
        subscriptions: Sequence[Subscription],
    ) -> RunSummary:
        catalog = ResourceCatalog(resources)
        state = _RunState(queue_capacity=self._settings.queue_capacity)

        workers = [
            threading.Thread(
                target=self._work,
                args=(state,),
                name=f"sitewatch-worker-{index}",
                daemon=True,
            )
            for index in range(self._settings.worker_count)
        ]
        closer = threading.Thread(
            target=self._close_outcomes,
            args=(state, workers),
            name="sitewatch-closer",
            daemon=True,
        )
        collector = threading.Thread(
            target=self._collect,
            args=(state,),
            name="sitewatch-collector",
            daemon=True,
        )
        for worker in workers:
            worker.start()
        closer.start()
        collector.start()

        log_event(
            logger,
            logging.INFO,
            "run_started",
            subscriptions=len(subscriptions),
            resources=len(catalog),
            workers=len(workers),
        )
        try:
            self._dispatch(state, catalog, subscriptions)
        finally:
            for _ in workers:
                state.work_queue.put(_STOP)

        state.counter.wait()
        closer.join()
        collector.join()

        summary = RunSummary(
            dispatched=state.dispatched,
            completed=state.succeeded + state.failed,
            succeeded=state.succeeded,
            failed=state.failed,
            notified=state.tally[ProcessingResult.NOTIFIED],
            results=dict(state.results),
        )
        log_event(
            logger,
            logging.INFO,
            "run_completed",
            dispatched=summary.dispatched,
            succeeded=summary.succeeded,
            failed=summary.failed,
            notified=summary.notified,
        )
        return summary

    def _dispatch(
        self,
        state: _RunState,
        catalog: ResourceCatalog,
        subscriptions: Sequence[Subscription],
    ) -> None:
        for subscription in subscriptions:
            item = self._build_work_item(catalog, subscription)
            # Count before enqueue so the join never sees zero early.
            state.counter.add(1)
            state.work_queue.put(item)
            state.dispatched += 1

    def _build_work_item(self, catalog: ResourceCatalog, subscription: Subscription) -> WorkItem:
        resource_missing = not catalog.contains(subscription.resource_id)
        resource = catalog.get_by_id(subscription.resource_id)
        if resource_missing:
            log_event(
                logger,
                logging.WARNING,
                "unknown_resource",
                subscription_id=subscription.id,
                resource_id=subscription.resource_id,
            )

        return WorkItem(
            subscription=subscription,
            resource=resource,
            scraper=self._scrapers.resolve(resource.scraping_type),
            notifier=self._resolve_notifier(subscription),
            resource_missing=resource_missing,
        )

    def _resolve_notifier(self, subscription: Subscription) -> NotifierBase | None:
        try:
            return self._notifiers.resolve(subscription.notification)
        except UnsupportedNotifierError as exc:
            log_event(
                logger,
                logging.WARNING,
                "notifier_unavailable",
                subscription_id=subscription.id,
                error=str(exc),
            )
            return None

    def _work(self, state: _RunState) -> None:
        while True:
            item = state.work_queue.get()
            if item is _STOP:
                return
            state.outcome_queue.put(self._execute(item))

    @staticmethod
    def _execute(item: WorkItem) -> Outcome:
        subscription = item.subscription
        error: Exception | None = None
        value = ""

        if item.resource_missing:
            error = UnknownResourceError(
                f"subscription '{subscription.id}' references unknown resource "
                f"'{subscription.resource_id}'"
            )
        elif item.scraper is None:
            error = UnsupportedBackendError(
                f"no scraper registered for scraping type '{item.resource.scraping_type}' "
                f"(resource '{item.resource.id}')"
            )
        else:
            try:
                value = item.scraper.scrape(item.resource)
            except Exception as exc:
                error = exc

        return Outcome(
            subscription=subscription,
            resource=item.resource,
            notifier=item.notifier,
            value=value,
            error=error,
        )

    @staticmethod
    def _close_outcomes(state: _RunState, workers: list[threading.Thread]) -> None:
        for worker in workers:
            worker.join()
        state.outcome_queue.put(_STOP)

    def _collect(self, state: _RunState) -> None:
        while True:
            outcome = state.outcome_queue.get()
            if outcome is _STOP:
                return
            try:
                if outcome.ok:
                    state.succeeded += 1
                else:
                    state.failed += 1
                result = self._processor.process(outcome)
                if outcome.subscription.id in state.results:
                    log_event(
                        logger,
                        logging.WARNING,
                        "duplicate_subscription_id",
                        subscription_id=outcome.subscription.id,
                        replaced=state.results[outcome.subscription.id].value,
                        result=result.value,
                    )
                state.results[outcome.subscription.id] = result
                state.tally[result] += 1
            except Exception as exc:
                log_event(
                    logger,
                    logging.ERROR,
                    "outcome_processing_failed",
                    subscription_id=outcome.subscription.id,
                    error=str(exc),
                )
            finally:
                state.counter.done()
