"""Mini README: Key-value storage backends for ledger snapshots.

Structure:
    * PersistenceError - raised when a backend cannot read or write.
    * PersistenceAdapter - abstract load/save contract used by the store.
    * InMemoryAdapter - dictionary backed store for tests and demos.
    * FileSystemAdapter - stores the blob as ``<key>.json`` on disk.

Adapters move opaque text blobs only. Encoding and validation of the snapshot
live in :mod:`happysoftie.ledger.codec` so a backend never needs to know
what a sale or an expense looks like.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)


class PersistenceError(RuntimeError):
    """The backing store could not be read from or written to."""


class PersistenceAdapter(ABC):
    """Base interface for snapshot storage backends."""

    def __init__(self, key: str) -> None:
        self.key = key

    @abstractmethod
    def load(self) -> Optional[str]:
        """Return the stored blob, or ``None`` when nothing was saved yet."""

    @abstractmethod
    def save(self, blob: str) -> None:
        """Replace the stored blob."""

    def describe(self) -> Dict[str, str]:
        """Return diagnostic metadata for logs and health output."""

        return {"backend": type(self).__name__, "key": self.key}


class InMemoryAdapter(PersistenceAdapter):
    """Keep blobs in a process-local dictionary."""

    def __init__(self, key: str = "happySoftieData", initial: Optional[str] = None) -> None:
        super().__init__(key)
        self._values: Dict[str, str] = {}
        self.save_count = 0
        if initial is not None:
            self._values[key] = initial

    def load(self) -> Optional[str]:
        return self._values.get(self.key)

    def save(self, blob: str) -> None:
        self._values[self.key] = blob
        self.save_count += 1


class FileSystemAdapter(PersistenceAdapter):
    """Persist the blob as a JSON file inside ``directory``."""

    def __init__(self, directory: Path, key: str = "happySoftieData") -> None:
        super().__init__(key)
        self.directory = Path(directory)

    @property
    def path(self) -> Path:
        return self.directory / f"{self.key}.json"

    def load(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            LOGGER.debug("No snapshot stored at %s", self.path)
            return None
        except OSError as error:
            raise PersistenceError(f"Unable to read snapshot from {self.path}: {error}") from error

    def save(self, blob: str) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{self.key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(handle, "w", encoding="utf-8") as temp_file:
                    temp_file.write(blob)
                os.replace(temp_name, self.path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as error:
            raise PersistenceError(f"Unable to write snapshot to {self.path}: {error}") from error
        LOGGER.debug("Snapshot written to %s (%s bytes)", self.path, len(blob))

    def describe(self) -> Dict[str, str]:
        details = super().describe()
        details["path"] = str(self.path)
        return details
