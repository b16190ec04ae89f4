"""Mini README: Tests for environment driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from expense_tracker.configuration import ExpenseTrackerSettings, get_settings


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXPENSE_TRACKER_DATABASE_URL", "  sqlite:///expenses.db ")
    monkeypatch.setenv("EXPENSE_TRACKER_LOG_LEVEL", "debug")
    get_settings.cache_clear()

    settings = get_settings()

    assert settings.database_url == "sqlite:///expenses.db"
    assert settings.log_level == "DEBUG"
    get_settings.cache_clear()


def test_settings_reject_blank_url_and_unknown_level() -> None:
    with pytest.raises(ValidationError):
        ExpenseTrackerSettings(database_url="   ")
    with pytest.raises(ValidationError):
        ExpenseTrackerSettings(log_level="chatty")
