"""Mini README: Centralised configuration for the expense tracker.

Structure:
    * ExpenseTrackerSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Set ``EXPENSE_TRACKER_DATABASE_URL`` (or put it in a ``.env`` file) to
    point the tracker at a database. Any SQLAlchemy URL works; PostgreSQL is
    the default target.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class ExpenseTrackerSettings(BaseSettings):
    """Runtime configuration for the expense tracker CLI."""

    database_url: str = Field(
        "postgresql://localhost/expenses",
        description="SQLAlchemy URL of the database holding the expenses table.",
    )
    log_level: str = Field(
        "WARNING",
        description="Root logging level. Logs are written to stderr.",
    )
    echo_sql: bool = Field(
        False,
        description="Log every SQL statement issued by SQLAlchemy.",
    )

    class Config:
        env_prefix = "EXPENSE_TRACKER_"
        env_file = ".env"
        case_sensitive = False

    @validator("database_url")
    def _require_url(cls, value: str) -> str:
        """Reject blank database URLs early with a readable message."""

        value = value.strip()
        if not value:
            raise ValueError("A database URL is required.")
        return value

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache()
def get_settings() -> ExpenseTrackerSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return ExpenseTrackerSettings()
