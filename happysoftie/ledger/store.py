"""Mini README: The single mutable component of the bookkeeping system.

Structure:
    * TransactionStore - holds the current ``AppState`` snapshot and applies
      add/edit/delete transitions for sales and expenses.

Every transition builds a brand new snapshot and swaps it in with a single
assignment, so readers never observe a half-applied change. The new snapshot
is then handed to the persistence adapter. A failing save propagates as
``PersistenceError`` while the in-memory change stays applied; callers decide
whether to retry. Edits and deletes that reference an unknown id leave the
snapshot untouched and report ``False``.

The store is not thread-safe. Hosts that can invoke it concurrently must
serialise calls themselves.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import date
from typing import Callable, Optional, Tuple, TypeVar, Union

from ..logging_utils import get_logger
from ..persistence import PersistenceAdapter
from .codec import SnapshotDecodeError, decode_snapshot, encode_snapshot
from .models import AppState, Expense, Sale, parse_calendar_day

LOGGER = get_logger(__name__)

_Record = TypeVar("_Record", Sale, Expense)


def _generate_id() -> str:
    return uuid.uuid4().hex


def _replace_by_id(records: Tuple[_Record, ...], updated: _Record) -> Tuple[Tuple[_Record, ...], bool]:
    matched = False
    replaced = []
    for record in records:
        if record.transaction_id == updated.transaction_id:
            replaced.append(updated)
            matched = True
        else:
            replaced.append(record)
    return tuple(replaced), matched


def _normalised(record: _Record) -> _Record:
    """Coerce the loosely typed fields the same way the add methods do."""

    return replace(record, occurred_on=parse_calendar_day(record.occurred_on), amount=float(record.amount))


def _remove_by_id(records: Tuple[_Record, ...], transaction_id: str) -> Tuple[Tuple[_Record, ...], bool]:
    kept = tuple(record for record in records if record.transaction_id != transaction_id)
    return kept, len(kept) != len(records)


class TransactionStore:
    """Own the canonical snapshot of sales and expenses."""

    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._adapter = adapter
        self._id_factory = id_factory or _generate_id
        self._state = AppState.empty()

    @property
    def state(self) -> AppState:
        """Return the current snapshot."""

        return self._state

    def load(self, snapshot: AppState) -> None:
        """Replace the whole snapshot without persisting it."""

        self._state = snapshot
        LOGGER.info(
            "Loaded snapshot with %s sales and %s expenses",
            len(snapshot.sales),
            len(snapshot.expenses),
        )

    def restore(self) -> AppState:
        """Load the persisted snapshot, falling back to an empty ledger.

        A missing blob or one that fails validation yields the empty state.
        Errors raised by the adapter itself propagate unchanged.
        """

        blob = self._adapter.load()
        if blob is None:
            LOGGER.info("No persisted snapshot found; starting with an empty ledger")
            self.load(AppState.empty())
            return self._state
        try:
            snapshot = decode_snapshot(blob)
        except SnapshotDecodeError as error:
            LOGGER.warning("Discarding unreadable snapshot: %s", error)
            snapshot = AppState.empty()
        self.load(snapshot)
        return self._state

    def _commit(self, snapshot: AppState) -> None:
        self._state = snapshot
        self._adapter.save(encode_snapshot(snapshot))

    # Sales -----------------------------------------------------------------

    def get_sale(self, transaction_id: str) -> Optional[Sale]:
        return next((sale for sale in self._state.sales if sale.transaction_id == transaction_id), None)

    def add_sale(
        self,
        *,
        occurred_on: Union[date, str],
        customer: str,
        description: str,
        amount: float,
    ) -> Sale:
        """Append a new sale with a freshly generated id and return it."""

        sale = Sale(
            transaction_id=self._id_factory(),
            occurred_on=parse_calendar_day(occurred_on),
            customer=customer,
            description=description,
            amount=float(amount),
        )
        self._commit(replace(self._state, sales=self._state.sales + (sale,)))
        LOGGER.info("Added sale %s (%.2f)", sale.transaction_id, sale.amount)
        return sale

    def edit_sale(self, sale: Sale) -> bool:
        """Replace the sale sharing ``sale.transaction_id``."""

        sale = _normalised(sale)
        sales, matched = _replace_by_id(self._state.sales, sale)
        self._commit(replace(self._state, sales=sales) if matched else self._state)
        if matched:
            LOGGER.info("Edited sale %s", sale.transaction_id)
        else:
            LOGGER.debug("Edit ignored; sale %s not found", sale.transaction_id)
        return matched

    def delete_sale(self, transaction_id: str) -> bool:
        sales, matched = _remove_by_id(self._state.sales, transaction_id)
        self._commit(replace(self._state, sales=sales) if matched else self._state)
        if matched:
            LOGGER.info("Deleted sale %s", transaction_id)
        else:
            LOGGER.debug("Delete ignored; sale %s not found", transaction_id)
        return matched

    # Expenses --------------------------------------------------------------

    def get_expense(self, transaction_id: str) -> Optional[Expense]:
        return next(
            (expense for expense in self._state.expenses if expense.transaction_id == transaction_id),
            None,
        )

    def add_expense(
        self,
        *,
        occurred_on: Union[date, str],
        category: Optional[str],
        description: str,
        amount: float,
    ) -> Expense:
        """Append a new expense with a freshly generated id and return it."""

        expense = Expense(
            transaction_id=self._id_factory(),
            occurred_on=parse_calendar_day(occurred_on),
            category=category,
            description=description,
            amount=float(amount),
        )
        self._commit(replace(self._state, expenses=self._state.expenses + (expense,)))
        LOGGER.info("Added expense %s (%.2f)", expense.transaction_id, expense.amount)
        return expense

    def edit_expense(self, expense: Expense) -> bool:
        """Replace the expense sharing ``expense.transaction_id``."""

        expense = _normalised(expense)
        expenses, matched = _replace_by_id(self._state.expenses, expense)
        self._commit(replace(self._state, expenses=expenses) if matched else self._state)
        if matched:
            LOGGER.info("Edited expense %s", expense.transaction_id)
        else:
            LOGGER.debug("Edit ignored; expense %s not found", expense.transaction_id)
        return matched

    def delete_expense(self, transaction_id: str) -> bool:
        expenses, matched = _remove_by_id(self._state.expenses, transaction_id)
        self._commit(replace(self._state, expenses=expenses) if matched else self._state)
        if matched:
            LOGGER.info("Deleted expense %s", transaction_id)
        else:
            LOGGER.debug("Delete ignored; expense %s not found", transaction_id)
        return matched
