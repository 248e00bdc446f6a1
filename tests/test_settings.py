"""Tests for environment-backed settings."""

from __future__ import annotations

import logging

import pytest

from greendex.settings import get_settings


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GREENDEX_LOG_LEVEL", "GREENDEX_LOG_FORMAT", "GREENDEX_ACTIVITIES_FILE"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Unset variables fall back to documented defaults."""
    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.log_level_number == logging.INFO
    assert settings.log_format == "json"
    assert settings.activities_file is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables are read and normalised."""
    monkeypatch.setenv("GREENDEX_LOG_LEVEL", " debug ")
    monkeypatch.setenv("GREENDEX_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("GREENDEX_ACTIVITIES_FILE", "/tmp/activities.yml")

    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.log_level_number == logging.DEBUG
    assert settings.log_format == "text"
    assert settings.activities_file == "/tmp/activities.yml"


def test_malformed_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unknown levels and formats do not break configuration."""
    monkeypatch.setenv("GREENDEX_LOG_LEVEL", "chatty")
    monkeypatch.setenv("GREENDEX_LOG_FORMAT", "xml")
    monkeypatch.setenv("GREENDEX_ACTIVITIES_FILE", "")

    settings = get_settings()
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"
    assert settings.activities_file is None
