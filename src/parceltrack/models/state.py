"""Derived tracking state emitted by the synchronizer."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from parceltrack.ingestion.normalize import is_valid_coordinate
from parceltrack.models._base import ApiTimestamp, ParcelBaseModel, ServiceType, TrackingStatus

_STATUS_DISPLAY: dict[TrackingStatus, tuple[str, str]] = {
    TrackingStatus.PENDING: ("Pending", "clock"),
    TrackingStatus.PICKED_UP: ("Picked Up", "package"),
    TrackingStatus.IN_TRANSIT: ("In Transit", "truck"),
    TrackingStatus.DELIVERED: ("Delivered", "check"),
    TrackingStatus.CANCELLED: ("Cancelled", "x"),
}


def status_display(status: TrackingStatus | str | None) -> tuple[str, str]:
    """Return ``(label, icon)`` for a status; unknown values display as pending."""
    parsed = TrackingStatus.parse(status)
    return _STATUS_DISPLAY[parsed or TrackingStatus.PENDING]


class Location(BaseModel):
    """A point on the map with a human-readable address.

    ``(0, 0)`` means "unknown"; consumers decide whether to plot it.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    latitude: float = 0.0
    longitude: float = 0.0
    address: str = ""

    @property
    def is_valid(self) -> bool:
        return is_valid_coordinate(self.latitude, self.longitude)

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class TrackingEvent(ParcelBaseModel):
    """A single entry of the parcel's history timeline."""

    id: str = ""
    timestamp: ApiTimestamp = None
    status: TrackingStatus | None = None
    location: str = ""
    description: str = ""
    details: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> TrackingStatus | None:
        return TrackingStatus.parse(value)


class PartySummary(BaseModel):
    """Sender or recipient contact summary."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    phone: str = ""
    email: str = ""


class TrackingState(BaseModel):
    """Resolved, cache-ready view of one parcel.

    Owned by :class:`~parceltrack.TrackingSynchronizer`; every other
    component only holds references. The model is frozen so a state can be
    shared between the cache, subscribers and the map renderer.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tracking_number: str
    status: TrackingStatus
    origin: Location
    current: Location
    destination: Location
    events: tuple[TrackingEvent, ...] = ()
    estimated_delivery: datetime | None = None
    actual_delivery: datetime | None = None
    sender: PartySummary
    recipient: PartySummary
    service_type: ServiceType = ServiceType.LIGHT
    weight: float = 0.0
    route: tuple[tuple[float, float], ...] = Field(default=())
    """Ordered ``(latitude, longitude)`` path supplied by the backend, if any."""
    created_at: datetime | None = None
    last_updated: datetime

    @property
    def status_label(self) -> str:
        return status_display(self.status)[0]

    @property
    def status_icon(self) -> str:
        return status_display(self.status)[1]
