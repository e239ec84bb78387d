"""
Flat-file JSON persistence.

All state lives in a single JSON document with three top-level
collections: ``users``, ``bookings`` and ``messages``.  Every request
loads the whole document, works on the in-memory copy and, if it
changed anything, writes the whole document back.  Writes go to a
temporary file which is then renamed over the database file so a crash
mid-write never leaves a truncated document behind.

There is no locking.  Two requests that read, modify and write at the
same time can overwrite each other's changes; the server is meant for a
single logical writer.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

from .config import Settings
from .errors import StorageError

COLLECTIONS = ("users", "bookings", "messages")

Document = Dict[str, List[Dict[str, Any]]]


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


def get_database_path(settings: Settings) -> str:
    """Compute the path to the JSON database file.

    If ``settings.database_path`` is absolute, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_path = settings.database_path
    if os.path.isabs(db_path):
        return db_path
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_path).resolve())


def next_id(records: List[Dict[str, Any]]) -> int:
    """Return the next sequential identifier for a collection."""
    return max((record["id"] for record in records), default=0) + 1


class JsonStore:
    """Load and replace the JSON document on disk."""

    def __init__(self, path: str, reset_corrupt: bool = False) -> None:
        self.path = path
        self.reset_corrupt = reset_corrupt

    @classmethod
    def from_settings(cls, settings: Settings) -> "JsonStore":
        return cls(get_database_path(settings), reset_corrupt=settings.reset_corrupt_database)

    def load(self) -> Document:
        """Return the whole database.

        A missing file is an empty database.  A file that cannot be
        parsed raises ``StorageError`` unless the store was created with
        ``reset_corrupt=True``, in which case the error is logged and an
        empty database is returned.
        """
        logger = logging.getLogger(__name__)
        if not os.path.exists(self.path):
            return empty_document()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level JSON value is not an object")
        except (OSError, ValueError) as e:
            logger.error("Failed to read database %s: %s", self.path, e)
            if self.reset_corrupt:
                return empty_document()
            raise StorageError("Database file is corrupt") from e
        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def save(self, db: Document) -> None:
        """Atomically replace the database file with ``db``."""
        tmp_path = self.path + ".tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(db, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logging.getLogger(__name__).error("Failed to write database %s: %s", self.path, e)
            raise StorageError("Failed to write database") from e
