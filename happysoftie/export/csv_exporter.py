"""Mini README: Project filtered transactions into CSV exports.

Structure:
    * ExportRow - one flattened sale or expense.
    * project_rows - interleave sales and expenses chronologically.
    * render_csv / write_csv - delimited text output.
    * export_filename - download name embedding the date range.

Expenses are exported with negated amounts so the ``Amount`` column sums to
the net profit of the exported range. Quoting follows the standard CSV rules
of the ``csv`` module, so descriptions containing commas, quotes or newlines
survive a round trip through any conforming reader.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, List

from ..ledger.models import AppState
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

CSV_HEADER = ("Type", "Date", "Description", "Category/Customer", "Amount")


@dataclass(frozen=True, slots=True)
class ExportRow:
    """A single line of the export."""

    kind: str
    occurred_on: date
    description: str
    category_or_customer: str
    amount: float

    def as_row(self) -> List[str]:
        return [
            self.kind,
            self.occurred_on.isoformat(),
            self.description,
            self.category_or_customer,
            _format_amount(self.amount),
        ]


def _format_amount(amount: float) -> str:
    """Print whole amounts without a trailing ``.0``."""

    if float(amount).is_integer():
        return str(int(amount))
    return repr(float(amount))


def project_rows(transactions: AppState) -> List[ExportRow]:
    """Flatten sales and expenses into rows ordered by date ascending.

    Rows sharing a date keep sales before expenses, each in insertion order.
    """

    rows = [
        ExportRow(
            kind="Sale",
            occurred_on=sale.occurred_on,
            description=sale.description,
            category_or_customer=sale.customer,
            amount=sale.amount,
        )
        for sale in transactions.sales
    ]
    rows.extend(
        ExportRow(
            kind="Expense",
            occurred_on=expense.occurred_on,
            description=expense.description,
            category_or_customer=expense.category or "",
            amount=-expense.amount,
        )
        for expense in transactions.expenses
    )
    rows.sort(key=lambda row: row.occurred_on)
    return rows


def render_csv(rows: Iterable[ExportRow]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(row.as_row())
    return buffer.getvalue()


def export_filename(start: date, end: date) -> str:
    return f"happy-softie-report-{start.isoformat()}-to-{end.isoformat()}.csv"


def write_csv(rows: Iterable[ExportRow], destination: Path) -> Path:
    """Render ``rows`` and write them to ``destination``."""

    content = render_csv(rows)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(content, encoding="utf-8")
    LOGGER.info("Exported report to %s (%s bytes)", destination, len(content))
    return destination
