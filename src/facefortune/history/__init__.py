"""Local reading history."""

from pathlib import Path

from facefortune.history.models import SavedReading, format_korean_timestamp
from facefortune.history.storage import LocalStorage, StorageError
from facefortune.history.store import (
    HISTORY_KEY,
    MAX_ENTRIES,
    HistoryStorageError,
    HistoryStore,
)


def open_history(path: Path, max_entries: int = MAX_ENTRIES) -> HistoryStore:
    """Open the history stored in the local storage file at path."""
    return HistoryStore(LocalStorage(path), max_entries=max_entries)


__all__ = [
    "HISTORY_KEY",
    "MAX_ENTRIES",
    "HistoryStorageError",
    "HistoryStore",
    "LocalStorage",
    "SavedReading",
    "StorageError",
    "format_korean_timestamp",
    "open_history",
]
