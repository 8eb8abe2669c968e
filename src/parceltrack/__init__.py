"""parceltrack - Async parcel tracking synchronization core."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("parceltrack")
except PackageNotFoundError:
    __version__ = "0+local"
from parceltrack._transport import HttpTrackingClient, TrackingBackend
from parceltrack.config import TrackingConfig
from parceltrack.display import format_relative_time
from parceltrack.exceptions import (
    ParcelTrackError,
    TrackingApiError,
    TrackingConfigError,
    TrackingFetchError,
    TrackingTimeoutError,
    TrackingTransportError,
    TrackingValidationError,
)
from parceltrack.map import Bounds, MapRenderer, MapSurface, Marker, MarkerKind, Polyline
from parceltrack.models import (
    HistoryItem,
    Location,
    PartySummary,
    ServiceType,
    TrackingEvent,
    TrackingRecord,
    TrackingState,
    TrackingStatus,
)
from parceltrack.poller import PollHandle, RefreshPoller
from parceltrack.state.cache import CacheEntry, TrackingCache
from parceltrack.state.history import SearchHistoryStore
from parceltrack.state.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from parceltrack.synchronizer import TrackingSynchronizer, TrackingUpdate, UpdateSource
from parceltrack.tracking_number import format_tracking_number, is_valid_tracking_number, validate_tracking_number

__all__ = [
    "__version__",
    "Bounds",
    "CacheEntry",
    "HistoryItem",
    "HttpTrackingClient",
    "JsonFileStorage",
    "KeyValueStorage",
    "Location",
    "MapRenderer",
    "MapSurface",
    "Marker",
    "MarkerKind",
    "MemoryStorage",
    "ParcelTrackError",
    "PartySummary",
    "PollHandle",
    "Polyline",
    "RefreshPoller",
    "SearchHistoryStore",
    "ServiceType",
    "TrackingApiError",
    "TrackingBackend",
    "TrackingCache",
    "TrackingConfig",
    "TrackingConfigError",
    "TrackingEvent",
    "TrackingFetchError",
    "TrackingRecord",
    "TrackingState",
    "TrackingStatus",
    "TrackingSynchronizer",
    "TrackingTimeoutError",
    "TrackingTransportError",
    "TrackingUpdate",
    "TrackingValidationError",
    "UpdateSource",
    "format_relative_time",
    "format_tracking_number",
    "is_valid_tracking_number",
    "validate_tracking_number",
]
