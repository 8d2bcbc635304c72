from __future__ import annotations

import os
from pathlib import Path

import pytest

from sitewatch.config import get_watch_settings, load_env_files


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_watch_settings.cache_clear()
    yield
    get_watch_settings.cache_clear()


class TestWatchSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        settings = get_watch_settings()

        assert settings.worker_count == 4
        assert settings.queue_capacity == 100
        assert settings.json_timeout_seconds == 3.0
        assert settings.html_timeout_seconds == 5.0
        assert settings.smtp.enabled is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SITEWATCH_WORKER_COUNT", "16")
        monkeypatch.setenv("SITEWATCH_QUEUE_CAPACITY", "not-a-number")
        monkeypatch.setenv("SITEWATCH_SMTP_HOST", "smtp.example.com")
        monkeypatch.setenv("SITEWATCH_SMTP_PORT", "2525")

        settings = get_watch_settings()

        assert settings.worker_count == 16
        assert settings.queue_capacity == 100
        assert settings.smtp.enabled is True
        assert settings.smtp.port == 2525

    def test_worker_count_floor(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SITEWATCH_WORKER_COUNT", "0")
        assert get_watch_settings().worker_count == 1


class TestLoadEnvFiles:
    def test_existing_environment_wins(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text(
            "# comment\nSITEWATCH_USER_AGENT='from-file'\nSITEWATCH_WEBSITES_PATH=sites.toml\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("SITEWATCH_USER_AGENT", "from-env")
        monkeypatch.delenv("SITEWATCH_WEBSITES_PATH", raising=False)

        monkeypatch.chdir(tmp_path)
        load_env_files()

        assert os.environ["SITEWATCH_USER_AGENT"] == "from-env"
        assert os.environ["SITEWATCH_WEBSITES_PATH"] == "sites.toml"
        monkeypatch.delenv("SITEWATCH_WEBSITES_PATH")
