"""Mini README: Tests for the fixed-width expense listing.

Structure:
    * banner wording for zero, one and many expenses.
    * row layout and the total footer.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from expense_tracker.storage import Expense, render_listing
from expense_tracker.storage.rendering import count_banner, format_expense, total_lines


def _expense(expense_id: int, amount: str, memo: str, created_on: date) -> Expense:
    return Expense(id=expense_id, amount=Decimal(amount), memo=memo, created_on=created_on)


def test_count_banner_wording() -> None:
    assert count_banner(0) == "There are no expenses."
    assert count_banner(1) == "There is 1 expense."
    assert count_banner(7) == "There are 7 expenses."


def test_format_expense_right_justifies_columns() -> None:
    """Id, date and amount are padded to 3, 10 and 12 characters."""

    line = format_expense(_expense(1, "5", "coffee", date(2024, 5, 1)))
    assert line == "  1 | 2024-05-01 |         5.00 | coffee"


def test_total_only_shown_for_more_than_one_row() -> None:
    single = [_expense(1, "5.00", "coffee", date(2024, 5, 1))]
    assert total_lines([]) == []
    assert total_lines(single) == []
    assert render_listing(single) == ["There is 1 expense.", format_expense(single[0])]


def test_render_listing_with_total() -> None:
    """The footer is a dashed separator followed by the rounded sum."""

    expenses = [
        _expense(1, "5.00", "coffee", date(2024, 5, 1)),
        _expense(2, "12.50", "lunch", date(2024, 5, 2)),
    ]

    lines = render_listing(expenses)

    assert lines[0] == "There are 2 expenses."
    assert lines[1:3] == [format_expense(expense) for expense in expenses]
    assert lines[3] == "-" * 50
    assert lines[4] == "Total" + " " * 25 + "17.50" + " " * 14
    assert len(lines) == 5
