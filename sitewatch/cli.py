"""
Run one watch pass from the command line.
"""

from __future__ import annotations

import argparse
import dataclasses
import json

from sitewatch.config import get_watch_settings
from sitewatch.loader import load_resources, load_subscriptions
from sitewatch.logging_utils import configure_logging
from sitewatch.notifications import NotifierRegistry
from sitewatch.pipeline import WatchPipeline
from sitewatch.scraping import ScraperRegistry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape watched resources and notify subscribers whose thresholds are reached."
    )
    parser.add_argument(
        "--websites",
        dest="websites",
        default=None,
        help="Path to the websites TOML file (default: SITEWATCH_WEBSITES_PATH).",
    )
    parser.add_argument(
        "--subscriptions",
        dest="subscriptions",
        default=None,
        help="Path to the subscriptions TOML file (default: SITEWATCH_SUBSCRIPTIONS_PATH).",
    )
    parser.add_argument(
        "--workers",
        dest="workers",
        type=int,
        default=None,
        help="Number of concurrent scrape workers (default: SITEWATCH_WORKER_COUNT).",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    settings = get_watch_settings()
    if args.workers is not None:
        settings = dataclasses.replace(settings, worker_count=max(1, args.workers))

    resources = load_resources(args.websites or settings.websites_path)
    subscriptions = load_subscriptions(args.subscriptions or settings.subscriptions_path)

    pipeline = WatchPipeline(
        settings=settings,
        scrapers=ScraperRegistry.with_builtins(settings=settings),
        notifiers=NotifierRegistry.with_builtins(smtp=settings.smtp),
    )
    summary = pipeline.run(resources=resources, subscriptions=subscriptions)
    print(json.dumps(summary.as_dict(), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
