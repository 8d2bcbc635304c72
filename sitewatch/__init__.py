"""
sitewatch: scrape watched resources and notify when thresholds are reached.
"""

from sitewatch.domain import (
    NotificationSettings,
    Outcome,
    ProcessingResult,
    Resource,
    ResourceCatalog,
    RunSummary,
    Selector,
    Subscription,
    WorkItem,
)
from sitewatch.pipeline import CompletionCounter, WatchPipeline
from sitewatch.processing import ResultProcessor
from sitewatch.thresholds import evaluate

__all__ = [
    "CompletionCounter",
    "NotificationSettings",
    "Outcome",
    "ProcessingResult",
    "Resource",
    "ResourceCatalog",
    "ResultProcessor",
    "RunSummary",
    "Selector",
    "Subscription",
    "WatchPipeline",
    "WorkItem",
    "evaluate",
]
