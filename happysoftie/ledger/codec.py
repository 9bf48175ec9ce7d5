"""Mini README: JSON encoding and validated decoding of ledger snapshots.

Structure:
    * SnapshotDecodeError - the blob is not a usable snapshot.
    * SaleDocument / ExpenseDocument / SnapshotDocument - Pydantic schemas of
      the stored JSON shape.
    * encode_snapshot / decode_snapshot - conversion helpers.

The stored shape is
``{"sales": [{id, date, customer, description, amount}], "expenses":
[{id, date, category, description, amount}]}``. Unknown fields are ignored so
that newer writers stay readable, and a missing expense category is accepted
because aggregation treats it as ``Other``.
"""

from __future__ import annotations

import datetime as dt
import json
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .models import AppState, Expense, Sale, parse_calendar_day


class SnapshotDecodeError(ValueError):
    """The stored blob could not be parsed into a snapshot."""


class _TransactionDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    date: dt.date
    description: str
    amount: float

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, value: object) -> dt.date:
        return parse_calendar_day(value)


class SaleDocument(_TransactionDocument):
    customer: str

    def to_record(self) -> Sale:
        return Sale(
            transaction_id=self.id,
            occurred_on=self.date,
            customer=self.customer,
            description=self.description,
            amount=self.amount,
        )


class ExpenseDocument(_TransactionDocument):
    category: Optional[str] = None

    def to_record(self) -> Expense:
        return Expense(
            transaction_id=self.id,
            occurred_on=self.date,
            category=self.category,
            description=self.description,
            amount=self.amount,
        )


class SnapshotDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    sales: List[SaleDocument] = []
    expenses: List[ExpenseDocument] = []

    def to_state(self) -> AppState:
        return AppState(
            sales=tuple(document.to_record() for document in self.sales),
            expenses=tuple(document.to_record() for document in self.expenses),
        )


def encode_snapshot(state: AppState) -> str:
    """Serialise ``state`` into the JSON text stored by adapters."""

    return json.dumps(state.as_dict(), ensure_ascii=False)


def decode_snapshot(blob: str) -> AppState:
    """Parse and validate a stored blob.

    Raises:
        SnapshotDecodeError: if the blob is not JSON or does not match the
            snapshot shape.
    """

    try:
        document = SnapshotDocument.model_validate_json(blob)
    except ValidationError as error:
        raise SnapshotDecodeError(
            f"Stored snapshot is malformed ({error.error_count()} validation errors)"
        ) from error
    return document.to_state()
