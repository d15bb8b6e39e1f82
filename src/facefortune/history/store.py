"""Reading history kept in client-local storage.

The whole history is one JSON array under a single storage key. New
readings are prepended and the list is truncated, so the newest reading is
always first and the oldest is evicted once the cap is reached.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from pydantic import ValidationError

from facefortune.history.models import SavedReading, format_korean_timestamp
from facefortune.history.storage import LocalStorage, StorageError

logger = logging.getLogger(__name__)

HISTORY_KEY = "faceFortuneHistory"
MAX_ENTRIES = 20


class HistoryStorageError(Exception):
    """The history could not be persisted."""


class HistoryStore:
    """Capped, newest-first list of saved readings."""

    def __init__(
        self,
        storage: LocalStorage,
        *,
        key: str = HISTORY_KEY,
        max_entries: int = MAX_ENTRIES,
    ) -> None:
        self._storage = storage
        self._key = key
        self._max_entries = max_entries

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def list(self) -> list[SavedReading]:
        """Return persisted readings, newest first; empty if none or corrupt."""
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("corrupt_history", extra={"key": self._key})
            return []
        if not isinstance(items, list):
            logger.warning("corrupt_history", extra={"key": self._key})
            return []

        readings: list[SavedReading] = []
        for item in items:
            try:
                readings.append(SavedReading.model_validate(item))
            except ValidationError:
                logger.debug("Skipping invalid history entry: %s", str(item)[:80])
        return readings

    def load(self, reading_id: str) -> SavedReading | None:
        return next((r for r in self.list() if r.id == reading_id), None)

    def append(self, reading: SavedReading) -> list[SavedReading]:
        """Prepend a reading, evicting the oldest beyond the cap.

        Raises:
            HistoryStorageError: If the history could not be written.
        """
        readings = [reading, *self.list()][: self._max_entries]
        self._persist(readings)
        logger.info("reading_saved", extra={"reading_id": reading.id})
        return readings

    def remove(self, reading_id: str) -> list[SavedReading]:
        """Delete a reading by id; unknown ids leave the history untouched.

        Raises:
            HistoryStorageError: If the history could not be written.
        """
        readings = self.list()
        remaining = [r for r in readings if r.id != reading_id]
        if len(remaining) != len(readings):
            self._persist(remaining)
            logger.info("reading_deleted", extra={"reading_id": reading_id})
        return remaining

    def create_reading(
        self,
        *,
        thumbnail: str,
        result: str,
        now: datetime | None = None,
    ) -> SavedReading:
        """Build a reading with a timestamp id unique within this store."""
        moment = now or datetime.now().astimezone()
        existing = {r.id for r in self.list()}
        stamp = int(moment.timestamp() * 1000)
        while str(stamp) in existing:
            stamp += 1
        return SavedReading(
            id=str(stamp),
            date=format_korean_timestamp(moment),
            thumbnail=thumbnail,
            result=result,
        )

    def _persist(self, readings: list[SavedReading]) -> None:
        payload = json.dumps(
            [r.model_dump(mode="json") for r in readings], ensure_ascii=False
        )
        try:
            self._storage.set_item(self._key, payload)
        except StorageError as e:
            logger.error("history_write_failed", extra={"error.message": str(e)})
            raise HistoryStorageError(str(e)) from e
