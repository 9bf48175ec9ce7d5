"""Mini README: Tests for monthly, daily and category aggregation.

These tests pin the month window labels, calendar-month matching, the
inclusive date filter, zero-filled daily series and the category grouping
used by the dashboard and reporting views.
"""

from __future__ import annotations

import calendar
from datetime import date

import pytest

from happysoftie.ledger import AppState, Expense, Sale
from happysoftie.reporting import (
    build_report,
    daily_series,
    default_report_range,
    filter_by_date_range,
    group_expenses_by_category,
    month_buckets,
    monthly_series,
)


def _sale(transaction_id: str, day: date, amount: float) -> Sale:
    return Sale(
        transaction_id=transaction_id,
        occurred_on=day,
        customer="Customer",
        description="Sale",
        amount=amount,
    )


def _expense(transaction_id: str, day: date, amount: float, category=None) -> Expense:
    return Expense(
        transaction_id=transaction_id,
        occurred_on=day,
        category=category,
        description="Expense",
        amount=amount,
    )


def test_month_buckets_end_with_current_month() -> None:
    buckets = month_buckets(6, today=date(2024, 3, 15))

    assert [bucket.label for bucket in buckets] == [
        "Oct 23",
        "Nov 23",
        "Dec 23",
        "Jan 24",
        "Feb 24",
        "Mar 24",
    ]
    assert (buckets[-1].month_name, buckets[-1].year_suffix) == ("Mar", "24")


def test_month_labels_ignore_locale_month_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(calendar, "month_abbr", ["", *["x"] * 12])

    buckets = month_buckets(12, today=date(2024, 12, 1))

    assert [bucket.month_name for bucket in buckets] == [
        "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ]


def test_month_buckets_default_to_today() -> None:
    buckets = month_buckets(6)
    today = date.today()

    assert len(buckets) == 6
    assert (buckets[-1].year, buckets[-1].month) == (today.year, today.month)


def test_month_buckets_handle_degenerate_sizes() -> None:
    assert month_buckets(0) == []
    assert len(month_buckets(1, today=date(2024, 1, 31))) == 1


def test_monthly_series_matches_calendar_months() -> None:
    state = AppState(
        sales=(
            _sale("s1", date(2024, 3, 1), 100.0),
            _sale("s2", date(2024, 3, 31), 50.0),
            _sale("s3", date(2023, 3, 10), 999.0),
            _sale("s4", date(2023, 9, 30), 7.0),
        ),
        expenses=(_expense("e1", date(2024, 2, 29), 40.0, "Rent"),),
    )

    series = monthly_series(state, months=6, today=date(2024, 3, 15))

    by_label = {bucket.label: bucket for bucket in series}
    assert by_label["Mar 24"].sales == pytest.approx(150.0)
    assert by_label["Feb 24"].expenses == pytest.approx(40.0)
    assert by_label["Feb 24"].profit == pytest.approx(-40.0)
    assert sum(bucket.sales for bucket in series) == pytest.approx(150.0)


def test_category_grouping_defaults_missing_to_other() -> None:
    expenses = [
        _expense("e1", date(2024, 1, 1), 500.0, "Rent"),
        _expense("e2", date(2024, 1, 2), 20.0, None),
    ]

    grouped = group_expenses_by_category(expenses)

    assert [(entry.category, entry.amount) for entry in grouped] == [("Rent", 500.0), ("Other", 20.0)]
    assert grouped[0].color == "#8B5CF6"


def test_category_grouping_sorting_and_unknown_colors() -> None:
    expenses = [
        _expense("e1", date(2024, 1, 1), 10.0, "Travel"),
        _expense("e2", date(2024, 1, 2), 30.0, "Snacks"),
        _expense("e3", date(2024, 1, 3), 15.0, "Travel"),
        _expense("e4", date(2024, 1, 4), 5.0, ""),
    ]

    grouped = group_expenses_by_category(expenses, sort_descending=True)

    assert [entry.category for entry in grouped] == ["Snacks", "Travel", "Other"]
    assert grouped[1].amount == pytest.approx(25.0)
    assert grouped[0].color == "#94A3B8"
    assert group_expenses_by_category([]) == []


def test_filter_by_date_range_includes_both_ends() -> None:
    state = AppState(
        sales=(
            _sale("before", date(2023, 12, 31), 1.0),
            _sale("start", date(2024, 1, 1), 2.0),
            _sale("end", date(2024, 1, 31), 3.0),
            _sale("after", date(2024, 2, 1), 4.0),
        ),
        expenses=(_expense("e1", date(2024, 1, 15), 5.0),),
    )

    filtered = filter_by_date_range(state, date(2024, 1, 1), date(2024, 1, 31))

    assert [sale.transaction_id for sale in filtered.sales] == ["start", "end"]
    assert len(filtered.expenses) == 1


def test_daily_series_fills_empty_days() -> None:
    state = AppState(
        sales=(_sale("s1", date(2024, 1, 2), 100.0),),
        expenses=(_expense("e1", date(2024, 1, 2), 40.0, "Rent"),),
    )

    series = daily_series(state, date(2024, 1, 1), date(2024, 1, 3))

    assert [(entry.sales, entry.expenses, entry.profit) for entry in series] == [
        (0.0, 0.0, 0.0),
        (100.0, 40.0, 60.0),
        (0.0, 0.0, 0.0),
    ]
    assert [entry.day for entry in series] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]


def test_daily_series_inverted_range_is_empty() -> None:
    state = AppState(sales=(_sale("s1", date(2024, 1, 2), 100.0),))

    assert daily_series(state, date(2024, 1, 3), date(2024, 1, 1)) == []


def test_build_report_combines_range_figures() -> None:
    state = AppState(
        sales=(_sale("s1", date(2024, 1, 2), 100.0), _sale("s2", date(2024, 3, 1), 900.0)),
        expenses=(
            _expense("e1", date(2024, 1, 2), 40.0, "Rent"),
            _expense("e2", date(2024, 1, 3), 60.0, "Marketing"),
        ),
    )

    report = build_report(state, date(2024, 1, 1), date(2024, 1, 3))

    assert report.total_sales == pytest.approx(100.0)
    assert report.total_expenses == pytest.approx(100.0)
    assert report.profit == pytest.approx(0.0)
    assert len(report.daily) == 3
    assert [entry.category for entry in report.categories] == ["Marketing", "Rent"]
    payload = report.as_dict()
    assert payload["start"] == "2024-01-01"
    assert payload["daily"][1] == {"date": "2024-01-02", "sales": 100.0, "expenses": 40.0, "profit": 60.0}


def test_default_report_range_spans_window() -> None:
    assert default_report_range(date(2024, 3, 31), 30) == (date(2024, 3, 1), date(2024, 3, 31))
