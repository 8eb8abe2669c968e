"""Tracking synchronizer: cache, fetch, history and polling in one state stream."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from parceltrack.config import TrackingConfig
from parceltrack.exceptions import (
    ParcelTrackError,
    TrackingFetchError,
    TrackingTimeoutError,
    TrackingValidationError,
)
from parceltrack.ingestion.state import build_state
from parceltrack.models.record import TrackingRecord
from parceltrack.models.state import TrackingState
from parceltrack.poller import RefreshPoller
from parceltrack.state.cache import TrackingCache
from parceltrack.state.history import SearchHistoryStore
from parceltrack.state.storage import KeyValueStorage, MemoryStorage
from parceltrack.tracking_number import validate_tracking_number

_logger = logging.getLogger(__name__)

FetchTracking = Callable[[str], Awaitable[TrackingRecord]]
"""Backend lookup: tracking number in, raw record out, raises on failure."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UpdateSource(enum.StrEnum):
    CACHE = "cache"
    NETWORK = "network"
    POLL = "poll"
    REFRESH = "refresh"
    VALIDATION = "validation"
    CLEARED = "cleared"


@dataclass(frozen=True, slots=True)
class TrackingUpdate:
    """One value of the tracking stream: a state, an error, or a clear."""

    tracking_number: str
    source: UpdateSource
    state: TrackingState | None = None
    error: ParcelTrackError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


Subscriber = Callable[[TrackingUpdate], Any]


class TrackingSynchronizer:
    """Keeps one tracking target synchronized.

    Usage::

        async with TrackingSynchronizer(client.fetch_tracking) as sync:
            unsubscribe = sync.subscribe(print)
            async for update in sync.track("SND1234567890", real_time=True):
                ...

    The synchronizer is the only writer of the cache and the search history.
    Results belonging to a target that is no longer current are discarded.
    """

    def __init__(
        self,
        fetch: FetchTracking,
        *,
        config: TrackingConfig | None = None,
        storage: KeyValueStorage | None = None,
        cache: TrackingCache | None = None,
        history: SearchHistoryStore | None = None,
        poller: RefreshPoller | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config or TrackingConfig()
        self._fetch = fetch
        self._clock = clock
        self._cache = cache or TrackingCache(ttl=timedelta(seconds=self._config.cache_ttl), clock=clock)
        self._history = history or SearchHistoryStore(
            storage if storage is not None else MemoryStorage(),
            key=self._config.history_key,
            limit=self._config.history_limit,
            clock=clock,
        )
        self._poller = poller or RefreshPoller(interval=self._config.poll_interval)
        self._subscribers: list[Subscriber] = []
        self._target: str | None = None
        self._state: TrackingState | None = None
        self._error: ParcelTrackError | None = None
        self._loading = False
        self._disposed = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TrackingSynchronizer:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def cache(self) -> TrackingCache:
        return self._cache

    @property
    def history(self) -> SearchHistoryStore:
        return self._history

    @property
    def state(self) -> TrackingState | None:
        return self._state

    @property
    def error(self) -> ParcelTrackError | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def target(self) -> str | None:
        return self._target

    @property
    def is_polling(self) -> bool:
        return self._poller.is_active

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for every update; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _publish(self, update: TrackingUpdate) -> TrackingUpdate:
        if update.source == UpdateSource.CLEARED:
            self._state = None
            self._error = None
        elif update.error is not None:
            self._error = update.error
        else:
            self._state = update.state
            self._error = None
        for callback in list(self._subscribers):
            try:
                callback(update)
            except Exception:
                _logger.debug("Tracking subscriber %r failed", callback, exc_info=True)
        return update

    # ------------------------------------------------------------------
    # Fetch pipeline
    # ------------------------------------------------------------------

    async def _fetch_record(self, tracking_number: str) -> TrackingRecord:
        """Run the injected fetch under the configured timeout.

        Every failure surfaces as :class:`TrackingFetchError`.
        """
        try:
            async with asyncio.timeout(self._config.fetch_timeout):
                return await self._fetch(tracking_number)
        except TrackingFetchError:
            raise
        except TimeoutError as exc:
            raise TrackingTimeoutError(
                f"Tracking lookup for {tracking_number} timed out after {self._config.fetch_timeout:.0f}s",
                tracking_number=tracking_number,
            ) from exc
        except Exception as exc:
            raise TrackingFetchError(
                f"Failed to track parcel {tracking_number}: {exc}",
                tracking_number=tracking_number,
            ) from exc

    def _is_current(self, tracking_number: str) -> bool:
        return not self._disposed and self._target == tracking_number

    def _apply(self, tracking_number: str, record: TrackingRecord) -> TrackingState:
        state = build_state(record, now=self._clock())
        self._cache.put(tracking_number, state)
        try:
            self._history.record(tracking_number, state.status)
        except (OSError, ValueError):
            _logger.warning("Could not record %s in search history", tracking_number, exc_info=True)
        return state

    async def _poll_tick(self, tracking_number: str) -> None:
        record = await self._fetch_record(tracking_number)
        if not self._is_current(tracking_number) or not self._poller.is_active_for(tracking_number):
            _logger.debug("Discarding poll result for superseded target %s", tracking_number)
            return
        state = self._apply(tracking_number, record)
        _logger.debug("Poll refreshed %s status=%s", tracking_number, state.status)
        self._publish(TrackingUpdate(tracking_number=tracking_number, source=UpdateSource.POLL, state=state))

    def _start_polling(self, tracking_number: str) -> None:
        self._poller.start(tracking_number, self._poll_tick, interval=self._config.poll_interval)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def track(self, tracking_number: str, *, real_time: bool = False) -> AsyncIterator[TrackingUpdate]:
        """Track *tracking_number*, yielding each update as it is produced.

        A fresh cache entry is yielded immediately and no fetch is issued.
        Otherwise one fetch is made and its state (or error) is yielded.
        With *real_time*, a refresh loop is started before the final update
        is yielded, so stopping iteration early does not lose it.
        """
        if self._disposed:
            raise ParcelTrackError("TrackingSynchronizer has been disposed")

        # Revoke the previous target's authority before anything else.
        self._poller.stop()
        self._target = None

        try:
            number = validate_tracking_number(tracking_number)
        except TrackingValidationError as exc:
            self._loading = False
            yield self._publish(
                TrackingUpdate(tracking_number=tracking_number, source=UpdateSource.VALIDATION, error=exc)
            )
            return

        self._target = number
        self._error = None

        cached = self._cache.get(number)
        if cached is not None:
            _logger.debug("Cache hit for %s", number)
            self._loading = False
            if real_time:
                self._start_polling(number)
            yield self._publish(TrackingUpdate(tracking_number=number, source=UpdateSource.CACHE, state=cached))
            return

        _logger.debug("Cache miss for %s; fetching", number)
        self._loading = True
        try:
            record = await self._fetch_record(number)
        except TrackingFetchError as exc:
            if not self._is_current(number):
                _logger.debug("Dropping failed lookup for superseded target %s", number)
                return
            self._loading = False
            _logger.debug("Lookup for %s failed: %s", number, exc)
            yield self._publish(TrackingUpdate(tracking_number=number, source=UpdateSource.NETWORK, error=exc))
            return

        if not self._is_current(number):
            _logger.debug("Discarding lookup result for superseded target %s", number)
            return

        state = self._apply(number, record)
        self._loading = False
        if real_time:
            self._start_polling(number)
        yield self._publish(TrackingUpdate(tracking_number=number, source=UpdateSource.NETWORK, state=state))

    async def lookup(self, tracking_number: str, *, real_time: bool = False) -> TrackingUpdate | None:
        """Drain :meth:`track` and return its last update (``None`` if superseded)."""
        last: TrackingUpdate | None = None
        async for update in self.track(tracking_number, real_time=real_time):
            last = update
        return last

    async def refresh(self) -> TrackingUpdate | None:
        """Re-fetch the current target, bypassing the cache.

        Returns ``None`` when nothing is being tracked or the target changed
        while the fetch was in flight.
        """
        number = self._target
        if number is None:
            return None
        try:
            record = await self._fetch_record(number)
        except TrackingFetchError as exc:
            if not self._is_current(number):
                return None
            return self._publish(TrackingUpdate(tracking_number=number, source=UpdateSource.REFRESH, error=exc))
        if not self._is_current(number):
            return None
        state = self._apply(number, record)
        return self._publish(TrackingUpdate(tracking_number=number, source=UpdateSource.REFRESH, state=state))

    def stop_real_time(self) -> None:
        self._poller.stop()

    def clear(self) -> None:
        """Stop polling and reset the emitted state. The cache is kept."""
        self._poller.stop()
        previous = self._target or ""
        self._target = None
        self._loading = False
        self._publish(TrackingUpdate(tracking_number=previous, source=UpdateSource.CLEARED))

    def dispose(self) -> None:
        """Stop polling and drop all subscribers. Idempotent."""
        self._poller.stop()
        self._target = None
        self._loading = False
        self._subscribers.clear()
        self._disposed = True

    async def aclose(self) -> None:
        """Dispose and wait for the refresh loop to finish cancelling."""
        await self._poller.aclose()
        self.dispose()
