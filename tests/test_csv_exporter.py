"""Mini README: Tests for the CSV export projector.

Ensures rows are signed and ordered correctly, that quoting survives a round
trip through ``csv.reader`` and that files land where requested.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path

import pytest

from happysoftie.export import CSV_HEADER, export_filename, project_rows, render_csv, write_csv
from happysoftie.ledger import AppState, Expense, Sale


def _state() -> AppState:
    return AppState(
        sales=(
            Sale(
                transaction_id="s1",
                occurred_on=date(2024, 1, 5),
                customer='Smith, "Big" Co',
                description="Party, large",
                amount=100.0,
            ),
            Sale(
                transaction_id="s2",
                occurred_on=date(2024, 1, 1),
                customer="Ana",
                description="Cones",
                amount=12.5,
            ),
        ),
        expenses=(
            Expense(
                transaction_id="e1",
                occurred_on=date(2024, 1, 5),
                category="Rent",
                description="Shop",
                amount=30.0,
            ),
            Expense(
                transaction_id="e2",
                occurred_on=date(2024, 1, 3),
                category=None,
                description="Misc",
                amount=2.25,
            ),
        ),
    )


def test_rows_are_signed_and_chronological() -> None:
    rows = project_rows(_state())

    assert [(row.kind, row.occurred_on.day) for row in rows] == [
        ("Sale", 1),
        ("Expense", 3),
        ("Sale", 5),
        ("Expense", 5),
    ]
    assert rows[1].amount == pytest.approx(-2.25)
    assert rows[2].category_or_customer == 'Smith, "Big" Co'
    assert rows[3].category_or_customer == "Rent"


def test_amount_column_sums_to_profit() -> None:
    state = AppState(
        sales=(
            Sale(
                transaction_id="s1",
                occurred_on=date(2024, 1, 5),
                customer="Ana",
                description="Cones",
                amount=100.0,
            ),
        ),
        expenses=(
            Expense(
                transaction_id="e1",
                occurred_on=date(2024, 1, 5),
                category="Rent",
                description="Shop",
                amount=30.0,
            ),
        ),
    )

    parsed = list(csv.reader(io.StringIO(render_csv(project_rows(state)))))

    assert len(parsed) == 3
    assert sum(float(line[4]) for line in parsed[1:]) == pytest.approx(70.0)


def test_render_csv_quotes_and_round_trips() -> None:
    content = render_csv(project_rows(_state()))

    lines = content.splitlines()
    assert lines[0] == "Type,Date,Description,Category/Customer,Amount"
    assert lines[1] == "Sale,2024-01-01,Cones,Ana,12.5"
    assert lines[3] == 'Sale,2024-01-05,"Party, large","Smith, ""Big"" Co",100'

    parsed = list(csv.reader(io.StringIO(content)))
    assert tuple(parsed[0]) == CSV_HEADER
    assert parsed[3][2:4] == ["Party, large", 'Smith, "Big" Co']
    assert parsed[4][4] == "-30"


def test_export_filename_embeds_range() -> None:
    assert (
        export_filename(date(2024, 1, 1), date(2024, 1, 31))
        == "happy-softie-report-2024-01-01-to-2024-01-31.csv"
    )


def test_write_csv_creates_parent_directories(tmp_path: Path) -> None:
    destination = tmp_path / "exports" / "report.csv"

    written = write_csv(project_rows(_state()), destination)

    assert written == destination
    assert destination.read_text(encoding="utf-8").startswith("Type,Date")
