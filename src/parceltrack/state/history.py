"""Bounded, deduplicated, most-recent-first search history."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import TypeAdapter, ValidationError

from parceltrack._constants import HISTORY_KEY, HISTORY_LIMIT
from parceltrack.models._base import TrackingStatus
from parceltrack.models.history import HistoryItem
from parceltrack.state.storage import KeyValueStorage

_logger = logging.getLogger(__name__)

_HISTORY_ADAPTER: TypeAdapter[list[HistoryItem]] = TypeAdapter(list[HistoryItem])


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SearchHistoryStore:
    """Past lookups persisted as one JSON array under a single storage key.

    At most *limit* items, newest first, one item per tracking number.
    Missing or corrupt data reads as an empty history.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = HISTORY_KEY,
        limit: int = HISTORY_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._storage = storage
        self._key = key
        self._limit = limit
        self._clock = clock

    def list(self) -> list[HistoryItem]:
        try:
            raw = self._storage.get_item(self._key)
        except (OSError, ValueError):
            _logger.debug("Search history under %r is unreadable", self._key, exc_info=True)
            return []
        if not raw:
            return []
        try:
            return _HISTORY_ADAPTER.validate_json(raw)
        except ValidationError:
            _logger.debug("Discarding corrupt search history under %r", self._key, exc_info=True)
            return []

    def _write(self, items: list[HistoryItem]) -> None:
        payload = _HISTORY_ADAPTER.dump_json(items, by_alias=True).decode("utf-8")
        self._storage.set_item(self._key, payload)

    def record(self, tracking_number: str, status: TrackingStatus) -> list[HistoryItem]:
        """Move *tracking_number* to the front with a fresh timestamp and status."""
        items = [item for item in self.list() if item.tracking_number != tracking_number]
        items.insert(0, HistoryItem(tracking_number=tracking_number, searched_at=self._clock(), status=status))
        items = items[: self._limit]
        self._write(items)
        return items

    def remove(self, tracking_number: str) -> list[HistoryItem]:
        items = self.list()
        remaining = [item for item in items if item.tracking_number != tracking_number]
        if len(remaining) != len(items):
            self._write(remaining)
        return remaining

    def clear(self) -> None:
        self._storage.remove_item(self._key)
