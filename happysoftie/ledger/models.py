"""Mini README: Immutable records describing the bookkeeping ledger.

Structure:
    * ExpenseCategory - enum of the fixed expense categories.
    * Sale / Expense - frozen dataclasses for the two transaction kinds.
    * AppState - the complete snapshot of both collections.
    * parse_calendar_day - coerce loose date inputs into naive calendar days.

Records are never mutated in place: edits build a replacement record that
keeps the original ``transaction_id`` and the store swaps whole snapshots.
``as_dict`` on every type produces the JSON-compatible wire shape used by the
persistence layer and the HTTP interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


class ExpenseCategory(str, Enum):
    """Enumerate the fixed expense categories."""

    OFFICE_SUPPLIES = "Office Supplies"
    RENT = "Rent"
    UTILITIES = "Utilities"
    SALARIES = "Salaries"
    MARKETING = "Marketing"
    EQUIPMENT = "Equipment"
    SOFTWARE = "Software"
    TRAVEL = "Travel"
    OTHER = "Other"

    @classmethod
    def from_str(cls, value: str) -> "ExpenseCategory":
        """Coerce arbitrary casing into a known category."""

        try:
            normalised = value.strip().lower()
        except AttributeError as error:
            raise ValueError(f"Unsupported expense category: {value}") from error
        for member in cls:
            if member.value.lower() == normalised:
                return member
        raise ValueError(f"Unsupported expense category: {value}")

    @classmethod
    def normalise(cls, value: Optional[str]) -> str:
        """Return the aggregation label for ``value``, defaulting to ``Other``."""

        return value if value else cls.OTHER.value


def parse_calendar_day(value: object) -> date:
    """Parse ISO strings, dates or datetimes into a naive calendar day.

    Any time-of-day component is dropped, so ``"2024-01-02T23:30:00"`` and
    ``"2024-01-02"`` both resolve to the same day.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            return datetime.fromisoformat(text).date()
    raise ValueError("Dates must be provided as ISO strings or date/datetime instances.")


@dataclass(frozen=True, slots=True)
class Sale:
    """Income recorded against a customer."""

    transaction_id: str
    occurred_on: date
    customer: str
    description: str
    amount: float

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.transaction_id,
            "date": self.occurred_on.isoformat(),
            "customer": self.customer,
            "description": self.description,
            "amount": self.amount,
        }


@dataclass(frozen=True, slots=True)
class Expense:
    """Money spent, grouped by category for reporting."""

    transaction_id: str
    occurred_on: date
    category: Optional[str]
    description: str
    amount: float

    @property
    def category_label(self) -> str:
        """Category used by aggregation; missing values count as ``Other``."""

        return ExpenseCategory.normalise(self.category)

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.transaction_id,
            "date": self.occurred_on.isoformat(),
            "category": self.category,
            "description": self.description,
            "amount": self.amount,
        }


@dataclass(frozen=True, slots=True)
class AppState:
    """Snapshot of every sale and expense, in insertion order."""

    sales: Tuple[Sale, ...] = field(default_factory=tuple)
    expenses: Tuple[Expense, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "AppState":
        return cls()

    @property
    def transaction_count(self) -> int:
        return len(self.sales) + len(self.expenses)

    def as_dict(self) -> Dict[str, List[Dict[str, object]]]:
        """Export the snapshot with serialisable values."""

        return {
            "sales": [sale.as_dict() for sale in self.sales],
            "expenses": [expense.as_dict() for expense in self.expenses],
        }
