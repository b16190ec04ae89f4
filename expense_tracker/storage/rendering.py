"""Mini README: Plain-text rendering of expense listings.

Structure:
    * count_banner - sentence describing how many expenses are shown.
    * format_expense - fixed-width line for one expense.
    * total_lines - separator and total, only for more than one expense.
    * render_listing - banner, rows and optional total in display order.

Column widths are part of the CLI's observable output; scripts that parse it
rely on them staying put.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from .models import CENT, Expense

SEPARATOR = "-" * 50


def count_banner(count: int) -> str:
    if count == 0:
        return "There are no expenses."
    if count == 1:
        return "There is 1 expense."
    return f"There are {count} expenses."


def format_amount(amount: Decimal) -> str:
    return f"{amount.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def format_expense(expense: Expense) -> str:
    """Render ``id | date | amount | memo`` with right-justified columns."""

    return " | ".join(
        [
            str(expense.id).rjust(3),
            expense.created_on.isoformat().rjust(10),
            format_amount(expense.amount).rjust(12),
            expense.memo,
        ]
    )


def total_lines(expenses: Sequence[Expense]) -> List[str]:
    """Return the separator and total lines, or nothing for fewer than two rows."""

    if len(expenses) <= 1:
        return []
    total = sum((expense.amount for expense in expenses), Decimal("0"))
    return [SEPARATOR, "Total" + format_amount(total).rjust(30) + " " * 14]


def render_listing(expenses: Sequence[Expense]) -> List[str]:
    lines = [count_banner(len(expenses))]
    lines.extend(format_expense(expense) for expense in expenses)
    lines.extend(total_lines(expenses))
    return lines
