"""
sitewatch/config.py

Environment-driven runtime settings for watch runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

ENV_PREFIX = "SITEWATCH_"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    root = Path.cwd()
    for filename in (".env", ".env.local"):
        env_path = root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    stripped = raw.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped or None


@dataclass(frozen=True)
class SMTPSettings:
    """
    Outbound mail settings for the email notifier.

    Delivery falls back to printing when `host` is unset.
    """

    host: str | None = None
    port: int = 587
    username: str | None = None
    password: str | None = None
    sender: str | None = None
    timeout_seconds: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.host)


@dataclass(frozen=True)
class WatchSettings:
    """
    Runtime settings for one watch run.
    """

    worker_count: int = 4
    queue_capacity: int = 100
    json_timeout_seconds: float = 3.0
    html_timeout_seconds: float = 5.0
    user_agent: str = "sitewatch/1.0"
    websites_path: str = "websites.toml"
    subscriptions_path: str = "subscriptions.toml"
    smtp: SMTPSettings = SMTPSettings()


@lru_cache(maxsize=1)
def get_watch_settings() -> WatchSettings:
    """
    Return cached watch settings from environment variables.
    """

    load_env_files()
    return WatchSettings(
        worker_count=max(1, _get_int_env("WORKER_COUNT", 4)),
        queue_capacity=max(1, _get_int_env("QUEUE_CAPACITY", 100)),
        json_timeout_seconds=max(0.1, _get_float_env("JSON_TIMEOUT_SECONDS", 3.0)),
        html_timeout_seconds=max(0.1, _get_float_env("HTML_TIMEOUT_SECONDS", 5.0)),
        user_agent=_get_str_env("USER_AGENT", "sitewatch/1.0"),
        websites_path=_get_str_env("WEBSITES_PATH", "websites.toml"),
        subscriptions_path=_get_str_env("SUBSCRIPTIONS_PATH", "subscriptions.toml"),
        smtp=SMTPSettings(
            host=_get_optional_str_env("SMTP_HOST"),
            port=max(1, _get_int_env("SMTP_PORT", 587)),
            username=_get_optional_str_env("SMTP_USERNAME"),
            password=_get_optional_str_env("SMTP_PASSWORD"),
            sender=_get_optional_str_env("SMTP_SENDER"),
            timeout_seconds=max(1.0, _get_float_env("SMTP_TIMEOUT_SECONDS", 10.0)),
        ),
    )
