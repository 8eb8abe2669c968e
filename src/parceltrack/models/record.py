"""Raw tracking record as returned by ``GET /parcels/track/{number}``."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from parceltrack.ingestion.normalize import safe_float
from parceltrack.models._base import ApiFloat, ApiTimestamp, ParcelBaseModel
from parceltrack.models.state import TrackingEvent


class PartyRecord(ParcelBaseModel):
    """Sender/receiver user object embedded in a parcel."""

    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class TrackingRecord(ParcelBaseModel):
    """A parcel lookup response body (the envelope's ``data``).

    Immutable once received. Coordinates the backend omits are ``None``;
    the location resolver decides how to fall back.
    """

    tracking_number: str
    status: str | None = None
    """Backend status string, e.g. ``"IN_TRANSIT"``."""

    current_location: str | None = None
    current_latitude: ApiFloat = None
    current_longitude: ApiFloat = None

    pickup_location: str | None = None
    pickup_latitude: ApiFloat = None
    pickup_longitude: ApiFloat = None

    destination_location: str | None = None
    destination_latitude: ApiFloat = None
    destination_longitude: ApiFloat = None

    recipient_address: str | None = None
    weight: ApiFloat = None
    service_type: str | None = None

    sender: PartyRecord | None = None
    receiver: PartyRecord | None = None

    created_at: ApiTimestamp = None
    updated_at: ApiTimestamp = None
    estimated_delivery: ApiTimestamp = None
    actual_delivery: ApiTimestamp = None

    events: list[TrackingEvent] | None = None
    route_polyline: list[tuple[float, float]] = Field(default_factory=list)

    @property
    def has_explicit_current(self) -> bool:
        return self.current_latitude is not None and self.current_longitude is not None

    @field_validator("tracking_number", mode="before")
    @classmethod
    def _coerce_tracking_number(cls, value: Any) -> str:
        return str(value).strip()

    @field_validator("route_polyline", mode="before")
    @classmethod
    def _drop_malformed_points(cls, value: Any) -> list[tuple[float, float]]:
        if not isinstance(value, (list, tuple)):
            return []
        points: list[tuple[float, float]] = []
        for item in value:
            if not isinstance(item, (list, tuple)) or len(item) < 2:
                continue
            lat, lng = safe_float(item[0]), safe_float(item[1])
            if lat is None or lng is None:
                continue
            points.append((lat, lng))
        return points
