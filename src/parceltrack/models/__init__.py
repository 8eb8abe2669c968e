"""Data models for tracking payloads and derived state."""

from parceltrack.models._base import ApiFloat, ApiTimestamp, ParcelBaseModel, ServiceType, TrackingStatus
from parceltrack.models.envelope import ApiEnvelope
from parceltrack.models.history import HistoryItem
from parceltrack.models.record import PartyRecord, TrackingRecord
from parceltrack.models.state import (
    Location,
    PartySummary,
    TrackingEvent,
    TrackingState,
    status_display,
)

__all__ = [
    "ApiEnvelope",
    "ApiFloat",
    "ApiTimestamp",
    "HistoryItem",
    "Location",
    "ParcelBaseModel",
    "PartyRecord",
    "PartySummary",
    "ServiceType",
    "TrackingEvent",
    "TrackingRecord",
    "TrackingState",
    "TrackingStatus",
    "status_display",
]
