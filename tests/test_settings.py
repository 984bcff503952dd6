"""Unit tests for env-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from medbot.config import get_settings
from medbot.config.settings import Settings


def test_defaults(monkeypatch) -> None:
    for key in ("MEDBOT_PAGE_SIZE", "MEDBOT_LOG_LEVEL", "MEDBOT_BOT_NAME", "MEDBOT_CATALOG_PATH"):
        monkeypatch.delenv(key, raising=False)
    settings = get_settings()
    assert settings.page_size == 5
    assert settings.log_level == "INFO"
    assert not settings.catalog_configured()


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MEDBOT_PAGE_SIZE", "7")
    monkeypatch.setenv("MEDBOT_LOG_LEVEL", "debug")
    monkeypatch.setenv("MEDBOT_CATALOG_PATH", "data/catalog.json")
    settings = get_settings()
    assert settings.page_size == 7
    assert settings.log_level == "DEBUG"
    assert settings.catalog_path.endswith("catalog.json")


def test_bad_page_size_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("MEDBOT_PAGE_SIZE", "lots")
    assert get_settings().page_size == 5


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(page_size=0)
