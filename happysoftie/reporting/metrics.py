"""Mini README: Headline figures computed from a ledger snapshot.

Structure:
    * total_sales / total_expenses / profit - sums over the snapshot.
    * profit_margin - profit as a percentage of sales.
    * average_sale / average_expense - mean transaction sizes.
    * transaction_count / profit_status - dashboard quick stats.
    * FinancialSummary / summarise - bundle of every metric.

All functions are pure and total. Empty collections produce zeros rather
than division errors so presentation code never needs special cases.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict

from ..ledger.models import AppState


def total_sales(state: AppState) -> float:
    return sum((sale.amount for sale in state.sales), 0.0)


def total_expenses(state: AppState) -> float:
    return sum((expense.amount for expense in state.expenses), 0.0)


def profit(state: AppState) -> float:
    """Sales minus expenses; negative when running at a loss."""

    return total_sales(state) - total_expenses(state)


def profit_margin(state: AppState) -> float:
    """Return profit as a percentage of sales, or ``0`` without sales."""

    sales = total_sales(state)
    if sales <= 0:
        return 0.0
    return (sales - total_expenses(state)) / sales * 100


def average_sale(state: AppState) -> float:
    if not state.sales:
        return 0.0
    return total_sales(state) / len(state.sales)


def average_expense(state: AppState) -> float:
    if not state.expenses:
        return 0.0
    return total_expenses(state) / len(state.expenses)


def transaction_count(state: AppState) -> int:
    return state.transaction_count


def profit_status(state: AppState) -> str:
    """Describe the sign of the profit for dashboard badges."""

    value = profit(state)
    if value > 0:
        return "Profitable"
    if value < 0:
        return "Loss"
    return "Break-even"


@dataclass(frozen=True, slots=True)
class FinancialSummary:
    """Every headline metric for one snapshot."""

    total_sales: float
    total_expenses: float
    profit: float
    profit_margin: float
    average_sale: float
    average_expense: float
    transaction_count: int
    profit_status: str

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


def summarise(state: AppState) -> FinancialSummary:
    """Compute all headline metrics for ``state``."""

    return FinancialSummary(
        total_sales=total_sales(state),
        total_expenses=total_expenses(state),
        profit=profit(state),
        profit_margin=profit_margin(state),
        average_sale=average_sale(state),
        average_expense=average_expense(state),
        transaction_count=transaction_count(state),
        profit_status=profit_status(state),
    )
