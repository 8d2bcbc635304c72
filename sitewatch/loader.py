"""
TOML loader for resource and subscription definitions.

Resources live under ``[[website]]`` tables and subscriptions under
``[[subscription]]`` tables. Keys match case-insensitively and ignore
underscores, so ``scrapingType``, ``ScrapingType`` and ``scraping_type`` are
equivalent.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from sitewatch.domain import NotificationSettings, Resource, Selector, Subscription
from sitewatch.errors import ConfigError


def load_resources(path: str | Path) -> list[Resource]:
    """
    Load resource definitions from a TOML file.
    """

    parsed: list[Resource] = []
    for entry in _load_tables(path, "website"):
        selector = _table(entry, "selector")
        parsed.append(
            Resource(
                id=_str(entry, "id"),
                url=_str(entry, "url"),
                name=_str(entry, "name"),
                scraping_type=_str(entry, "scraping_type").lower(),
                selector=Selector(
                    value=_str(selector, "value"),
                    type=_str(selector, "type"),
                    threshold=_str(selector, "threshold"),
                    frequency=_str(selector, "frequency"),
                ),
                json_key=_str(entry, "json_key"),
                real_browser=_bool(entry, "real_browser"),
            )
        )
    return parsed


def load_subscriptions(path: str | Path) -> list[Subscription]:
    """
    Load subscription definitions from a TOML file.
    """

    parsed: list[Subscription] = []
    for entry in _load_tables(path, "subscription"):
        notification = _table(entry, "notification")
        parsed.append(
            Subscription(
                id=_str(entry, "id"),
                resource_id=_str(entry, "website_id") or _str(entry, "resource_id"),
                threshold=_str(entry, "threshold"),
                frequency=_str(entry, "frequency"),
                notification=NotificationSettings(
                    type=_str(notification, "type").lower(),
                    address=_str(notification, "address"),
                ),
            )
        )
    return parsed


def _load_tables(path: str | Path, key: str) -> list[Mapping[str, Any]]:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Definition file not found: {file_path}")

    try:
        raw_data = tomllib.loads(file_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {file_path}: {exc}") from exc

    entries = _lookup(raw_data, key)
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ConfigError(f"Invalid definitions in {file_path}: '{key}' must be an array of tables.")
    return [entry for entry in entries if isinstance(entry, Mapping)]


def _normalize_key(key: str) -> str:
    return key.replace("_", "").lower()


def _lookup(entry: Mapping[str, Any], key: str) -> Any:
    wanted = _normalize_key(key)
    for candidate, value in entry.items():
        if isinstance(candidate, str) and _normalize_key(candidate) == wanted:
            return value
    return None


def _str(entry: Mapping[str, Any], key: str) -> str:
    value = _lookup(entry, key)
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).strip()


def _bool(entry: Mapping[str, Any], key: str) -> bool:
    value = _lookup(entry, key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def _table(entry: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = _lookup(entry, key)
    return value if isinstance(value, Mapping) else {}
