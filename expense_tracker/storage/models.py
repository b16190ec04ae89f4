"""Mini README: Expense record and table definition.

Structure:
    * EXPENSES_TABLE - SQLAlchemy Core table mirroring the persisted schema.
    * Expense - immutable dataclass built from fetched rows.

The positivity rule on ``amount`` lives in the table's check constraint so
the database, not the application, is the authority on valid amounts.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from sqlalchemy import CheckConstraint, Column, Date, Integer, MetaData, Numeric, Table, Text

METADATA = MetaData()

EXPENSES_TABLE = Table(
    "expenses",
    METADATA,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("amount", Numeric(6, 2, asdecimal=True), nullable=False),
    Column("memo", Text, nullable=False),
    Column("created_on", Date, nullable=False),
    CheckConstraint("amount > 0.00", name="positive_amount"),
)

CENT = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class Expense:
    """A single recorded outlay."""

    id: int
    amount: Decimal
    memo: str
    created_on: date

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Expense":
        """Build an expense from a result row mapping."""

        return cls(
            id=int(row["id"]),
            amount=Decimal(str(row["amount"])).quantize(CENT),
            memo=row["memo"],
            created_on=row["created_on"],
        )
