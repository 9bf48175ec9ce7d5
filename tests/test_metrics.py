"""Mini README: Tests for the headline metric helpers.

Covers totals, profit sign handling, the zero-sales margin convention and
the averages used by the dashboard quick stats.
"""

from __future__ import annotations

from datetime import date

import pytest

from happysoftie.ledger import AppState, Expense, Sale
from happysoftie.reporting import (
    average_expense,
    average_sale,
    profit,
    profit_margin,
    profit_status,
    summarise,
    total_expenses,
    total_sales,
)


def _state(sales=(), expenses=()) -> AppState:
    return AppState(
        sales=tuple(
            Sale(
                transaction_id=f"s{index}",
                occurred_on=date(2024, 1, 1),
                customer="Customer",
                description="Sale",
                amount=amount,
            )
            for index, amount in enumerate(sales)
        ),
        expenses=tuple(
            Expense(
                transaction_id=f"e{index}",
                occurred_on=date(2024, 1, 1),
                category="Rent",
                description="Expense",
                amount=amount,
            )
            for index, amount in enumerate(expenses)
        ),
    )


def test_empty_state_yields_zeroes() -> None:
    state = AppState.empty()

    assert total_sales(state) == 0
    assert total_expenses(state) == 0
    assert profit(state) == 0
    assert profit_margin(state) == 0
    assert average_sale(state) == 0
    assert average_expense(state) == 0
    assert profit_status(state) == "Break-even"


def test_profit_and_margin() -> None:
    state = _state(sales=[100.0, 300.0], expenses=[50.0, 50.0])

    assert total_sales(state) == pytest.approx(400.0)
    assert total_expenses(state) == pytest.approx(100.0)
    assert profit(state) == pytest.approx(300.0)
    assert profit_margin(state) == pytest.approx(75.0)
    assert profit_status(state) == "Profitable"


def test_profit_may_be_negative() -> None:
    state = _state(sales=[50.0], expenses=[80.0])

    assert profit(state) == pytest.approx(-30.0)
    assert profit_margin(state) == pytest.approx(-60.0)
    assert profit_status(state) == "Loss"


def test_margin_is_zero_without_sales_regardless_of_expenses() -> None:
    state = _state(expenses=[999.0])

    assert profit_margin(state) == 0
    assert profit(state) == pytest.approx(-999.0)


def test_averages_and_summary() -> None:
    state = _state(sales=[10.0, 20.0, 30.0], expenses=[5.0])

    summary = summarise(state)

    assert average_sale(state) == pytest.approx(20.0)
    assert average_expense(state) == pytest.approx(5.0)
    assert summary.transaction_count == 4
    assert summary.as_dict()["profit"] == pytest.approx(55.0)
    assert summary.profit_status == "Profitable"
