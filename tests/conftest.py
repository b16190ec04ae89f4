"""Mini README: Shared fixtures for the expense tracker tests.

Structure:
    * engine - in-memory SQLite engine shared across connections.
    * store - ExpenseStore bound to that engine.
    * runner - Typer CLI runner.
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from typer.testing import CliRunner

from expense_tracker.storage import ExpenseStore


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture()
def store(engine) -> ExpenseStore:
    return ExpenseStore(engine)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()
