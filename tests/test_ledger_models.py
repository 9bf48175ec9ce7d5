"""Mini README: Tests for the ledger record helpers.

Structure:
    * ``ExpenseCategory`` coercion and normalisation.
    * ``parse_calendar_day`` parsing of dates, datetimes and ISO strings.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from happysoftie.ledger import ExpenseCategory, parse_calendar_day


def test_expense_category_coercion() -> None:
    assert ExpenseCategory.from_str("  office supplies ") is ExpenseCategory.OFFICE_SUPPLIES
    assert ExpenseCategory.normalise(None) == "Other"
    assert ExpenseCategory.normalise("Travel") == "Travel"
    with pytest.raises(ValueError):
        ExpenseCategory.from_str("Snacks")


@pytest.mark.parametrize(
    "value",
    ["2024-01-02", "2024-01-02T23:59:59", date(2024, 1, 2), datetime(2024, 1, 2, 8, 30)],
)
def test_parse_calendar_day_drops_time(value: object) -> None:
    assert parse_calendar_day(value) == date(2024, 1, 2)


def test_parse_calendar_day_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_calendar_day("next tuesday")
    with pytest.raises(ValueError):
        parse_calendar_day(20240102)
