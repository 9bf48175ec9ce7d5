"""Mini README: Time-bucketed and per-category aggregation for reporting.

Structure:
    * MonthBucket / month_buckets / monthly_series - trailing calendar months.
    * CategoryTotal / group_expenses_by_category - expense breakdown.
    * filter_by_date_range - inclusive calendar day filtering.
    * DailyTotals / daily_series - one entry per day of a range.
    * RangeReport / build_report / default_report_range - reporting view data.

Transactions carry naive calendar days, so the end of a range always covers
the whole end day. Degenerate inputs (no transactions, inverted ranges, empty
windows) resolve to zero or empty results instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..configuration import DEFAULT_CATEGORY_COLORS, DEFAULT_FALLBACK_COLOR
from ..ledger.models import AppState, Expense
from ..logging_utils import get_logger
from .metrics import profit, total_expenses, total_sales

LOGGER = get_logger(__name__)

_MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True, slots=True)
class MonthBucket:
    """A calendar month with the sales and expenses booked inside it."""

    year: int
    month: int
    sales: float = 0.0
    expenses: float = 0.0

    @property
    def month_name(self) -> str:
        return _MONTH_ABBREVIATIONS[self.month - 1]

    @property
    def year_suffix(self) -> str:
        return f"{self.year % 100:02d}"

    @property
    def label(self) -> str:
        """Chart label such as ``"Jan 24"``."""

        return f"{self.month_name} {self.year_suffix}"

    @property
    def profit(self) -> float:
        return self.sales - self.expenses

    def as_dict(self) -> Dict[str, object]:
        return {
            "label": self.label,
            "month": self.month_name,
            "year": self.year_suffix,
            "sales": self.sales,
            "expenses": self.expenses,
            "profit": self.profit,
        }


def _shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def month_buckets(n: int, today: Optional[date] = None) -> List[MonthBucket]:
    """Return the ``n`` most recent months ending with the current one, oldest first."""

    if n <= 0:
        return []
    today = today or date.today()
    return [
        MonthBucket(*_shift_month(today.year, today.month, offset))
        for offset in range(-(n - 1), 1)
    ]


def monthly_series(state: AppState, months: int = 6, today: Optional[date] = None) -> List[MonthBucket]:
    """Sum sales and expenses into the trailing month window.

    Transactions are matched by calendar month and year; anything outside the
    window is ignored.
    """

    buckets = month_buckets(months, today)
    sales: Dict[Tuple[int, int], float] = {(bucket.year, bucket.month): 0.0 for bucket in buckets}
    expenses: Dict[Tuple[int, int], float] = dict(sales)
    for sale in state.sales:
        key = (sale.occurred_on.year, sale.occurred_on.month)
        if key in sales:
            sales[key] += sale.amount
    for expense in state.expenses:
        key = (expense.occurred_on.year, expense.occurred_on.month)
        if key in expenses:
            expenses[key] += expense.amount
    LOGGER.debug("Built monthly series over %s buckets", len(buckets))
    return [
        MonthBucket(
            year=bucket.year,
            month=bucket.month,
            sales=sales[(bucket.year, bucket.month)],
            expenses=expenses[(bucket.year, bucket.month)],
        )
        for bucket in buckets
    ]


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    """Total spent in one expense category, with its chart colour."""

    category: str
    amount: float
    color: str

    def as_dict(self) -> Dict[str, object]:
        return {"category": self.category, "amount": self.amount, "color": self.color}


def category_color(
    category: str,
    colors: Optional[Mapping[str, str]] = None,
    default_color: str = DEFAULT_FALLBACK_COLOR,
) -> str:
    palette = DEFAULT_CATEGORY_COLORS if colors is None else colors
    return palette.get(category, default_color)


def group_expenses_by_category(
    expenses: Iterable[Expense],
    colors: Optional[Mapping[str, str]] = None,
    default_color: str = DEFAULT_FALLBACK_COLOR,
    *,
    sort_descending: bool = False,
) -> List[CategoryTotal]:
    """Sum expense amounts per category.

    Missing categories count as ``Other``. Only observed categories are
    returned, in first-seen order unless ``sort_descending`` is set.
    """

    totals: Dict[str, float] = {}
    for expense in expenses:
        label = expense.category_label
        totals[label] = totals.get(label, 0.0) + expense.amount
    grouped = [
        CategoryTotal(category=label, amount=amount, color=category_color(label, colors, default_color))
        for label, amount in totals.items()
    ]
    if sort_descending:
        grouped.sort(key=lambda entry: entry.amount, reverse=True)
    return grouped


def filter_by_date_range(state: AppState, start: date, end: date) -> AppState:
    """Keep transactions dated within ``[start, end]``, both days inclusive."""

    sales = tuple(sale for sale in state.sales if start <= sale.occurred_on <= end)
    expenses = tuple(expense for expense in state.expenses if start <= expense.occurred_on <= end)
    LOGGER.debug(
        "Filtered %s..%s -> %s sales, %s expenses", start, end, len(sales), len(expenses)
    )
    return AppState(sales=sales, expenses=expenses)


@dataclass(frozen=True, slots=True)
class DailyTotals:
    """Sales, expenses and profit for a single calendar day."""

    day: date
    sales: float = 0.0
    expenses: float = 0.0

    @property
    def profit(self) -> float:
        return self.sales - self.expenses

    def as_dict(self) -> Dict[str, object]:
        return {
            "date": self.day.isoformat(),
            "sales": self.sales,
            "expenses": self.expenses,
            "profit": self.profit,
        }


def daily_series(state: AppState, start: date, end: date) -> List[DailyTotals]:
    """Return one entry per day in ``[start, end]``, including empty days.

    An inverted range yields an empty list.
    """

    days = (end - start).days + 1
    sales: Dict[date, float] = {start + timedelta(days=offset): 0.0 for offset in range(max(days, 0))}
    expenses: Dict[date, float] = dict(sales)
    for sale in state.sales:
        if sale.occurred_on in sales:
            sales[sale.occurred_on] += sale.amount
    for expense in state.expenses:
        if expense.occurred_on in expenses:
            expenses[expense.occurred_on] += expense.amount
    return [DailyTotals(day=day, sales=sales[day], expenses=expenses[day]) for day in sorted(sales)]


@dataclass(frozen=True, slots=True)
class RangeReport:
    """Everything the reporting view shows for one date range."""

    start: date
    end: date
    total_sales: float
    total_expenses: float
    profit: float
    daily: List[DailyTotals] = field(default_factory=list)
    categories: List[CategoryTotal] = field(default_factory=list)
    transactions: AppState = field(default_factory=AppState.empty)

    def as_dict(self) -> Dict[str, object]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "total_sales": self.total_sales,
            "total_expenses": self.total_expenses,
            "profit": self.profit,
            "daily": [entry.as_dict() for entry in self.daily],
            "categories": [entry.as_dict() for entry in self.categories],
        }


def default_report_range(today: Optional[date] = None, window_days: int = 30) -> Tuple[date, date]:
    """Return the default ``(start, end)`` range ending today."""

    today = today or date.today()
    return today - timedelta(days=window_days), today


def build_report(
    state: AppState,
    start: date,
    end: date,
    colors: Optional[Mapping[str, str]] = None,
    default_color: str = DEFAULT_FALLBACK_COLOR,
) -> RangeReport:
    """Filter ``state`` to the range and compute totals, daily rows and categories."""

    filtered = filter_by_date_range(state, start, end)
    report = RangeReport(
        start=start,
        end=end,
        total_sales=total_sales(filtered),
        total_expenses=total_expenses(filtered),
        profit=profit(filtered),
        daily=daily_series(filtered, start, end),
        categories=group_expenses_by_category(
            filtered.expenses, colors, default_color, sort_descending=True
        ),
        transactions=filtered,
    )
    LOGGER.debug(
        "Report %s..%s: sales=%.2f expenses=%.2f", start, end, report.total_sales, report.total_expenses
    )
    return report
