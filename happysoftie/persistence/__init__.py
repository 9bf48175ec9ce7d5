"""Mini README: Snapshot storage backends for the bookkeeping ledger.

The store hands complete snapshots to an adapter after every mutation and
reads one back at startup. Adapters only move text blobs; the JSON shape and
its validation live in :mod:`happysoftie.ledger.codec`.
"""

from .adapters import FileSystemAdapter, InMemoryAdapter, PersistenceAdapter, PersistenceError

__all__ = [
    "FileSystemAdapter",
    "InMemoryAdapter",
    "PersistenceAdapter",
    "PersistenceError",
]
