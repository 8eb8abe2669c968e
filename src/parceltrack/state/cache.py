"""In-memory TTL cache of the last known tracking state per tracking number."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict

from parceltrack._constants import CACHE_TTL_SECONDS
from parceltrack.models.state import TrackingState

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    state: TrackingState
    fetched_at: datetime


class TrackingCache:
    """Last known :class:`TrackingState` per tracking number.

    An entry is fresh while ``now - fetched_at < ttl``. Expired entries are
    treated as absent by :meth:`get` but are not purged until overwritten
    or cleared.
    """

    def __init__(
        self,
        *,
        ttl: timedelta = timedelta(seconds=CACHE_TTL_SECONDS),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.fetched_at < self._ttl

    def get(self, tracking_number: str) -> TrackingState | None:
        """Return the cached state if it is still fresh."""
        entry = self._entries.get(tracking_number)
        if entry is None:
            return None
        if not self.is_fresh(entry):
            _logger.debug("Cache entry for %s expired (fetched_at=%s)", tracking_number, entry.fetched_at)
            return None
        return entry.state

    def entry(self, tracking_number: str) -> CacheEntry | None:
        """Raw entry regardless of freshness (diagnostics only)."""
        return self._entries.get(tracking_number)

    def put(self, tracking_number: str, state: TrackingState) -> CacheEntry:
        """Replace the entry wholesale and stamp it with the current time."""
        entry = CacheEntry(state=state, fetched_at=self._clock())
        self._entries[tracking_number] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()
