"""Synchronizer configuration for parceltrack."""

from __future__ import annotations

import dataclasses

from parceltrack._constants import (
    BASE_URL,
    CACHE_TTL_SECONDS,
    FETCH_TIMEOUT_SECONDS,
    HISTORY_KEY,
    HISTORY_LIMIT,
    MAP_BOUNDS_PADDING,
    POLL_INTERVAL_SECONDS,
    SINGLE_POINT_ZOOM,
)
from parceltrack.exceptions import TrackingConfigError


@dataclasses.dataclass(frozen=True)
class TrackingConfig:
    """Tracking core configuration.

    Parameters
    ----------
    base_url : str
        REST API base URL used by :class:`~parceltrack.HttpTrackingClient`.
    cache_ttl : float
        Seconds a cached tracking state is considered fresh.
    poll_interval : float
        Seconds between background refreshes when real-time mode is on.
    fetch_timeout : float
        Seconds before a lookup is abandoned and reported as a fetch error.
    history_limit : int
        Maximum number of search history items kept.
    history_key : str
        Storage key holding the persisted search history.
    map_padding : float
        Fractional padding applied when fitting the map to its points.
    single_point_zoom : int
        Zoom level used when only one point is rendered.
    """

    base_url: str = BASE_URL
    cache_ttl: float = CACHE_TTL_SECONDS
    poll_interval: float = POLL_INTERVAL_SECONDS
    fetch_timeout: float = FETCH_TIMEOUT_SECONDS
    history_limit: int = HISTORY_LIMIT
    history_key: str = HISTORY_KEY
    map_padding: float = MAP_BOUNDS_PADDING
    single_point_zoom: int = SINGLE_POINT_ZOOM

    def __post_init__(self) -> None:
        for name in ("cache_ttl", "poll_interval", "fetch_timeout"):
            if getattr(self, name) <= 0:
                raise TrackingConfigError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.history_limit <= 0:
            raise TrackingConfigError(f"history_limit must be positive, got {self.history_limit!r}")
        if not self.history_key:
            raise TrackingConfigError("history_key must be non-empty")
        if self.map_padding < 0:
            raise TrackingConfigError(f"map_padding must not be negative, got {self.map_padding!r}")
