"""Mini README: Sales and expense ledger for Happy Softie.

This package groups the immutable transaction records, the snapshot codec
used for persistence and the ``TransactionStore`` that applies add, edit and
delete operations. Everything downstream (reporting, export, the HTTP
interface) reads snapshots from a store instance passed in explicitly.
"""

from .codec import SnapshotDecodeError, decode_snapshot, encode_snapshot
from .models import AppState, Expense, ExpenseCategory, Sale, parse_calendar_day
from .store import TransactionStore

__all__ = [
    "AppState",
    "Expense",
    "ExpenseCategory",
    "Sale",
    "SnapshotDecodeError",
    "TransactionStore",
    "decode_snapshot",
    "encode_snapshot",
    "parse_calendar_day",
]
