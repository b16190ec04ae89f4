"""Mini README: Persistence layer for recorded expenses.

The store owns schema creation and every SQL statement; rendering helpers
turn fetched rows into the fixed-width listing printed by the CLI.
"""

from .models import EXPENSES_TABLE, Expense
from .rendering import render_listing
from .store import ExpenseStore, FailureKind, StoreFailure, StoreResult

__all__ = [
    "EXPENSES_TABLE",
    "Expense",
    "ExpenseStore",
    "FailureKind",
    "StoreFailure",
    "StoreResult",
    "render_listing",
]
