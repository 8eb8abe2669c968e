"""Status-driven location resolution.

Maps a raw record to an ``origin``/``current``/``destination`` triple. The
backend rarely reports where a parcel is, so ``current`` is derived from the
status and falls back to the origin/destination midpoint.
"""

from __future__ import annotations

from typing import NamedTuple

from parceltrack._constants import IN_TRANSIT_ADDRESS
from parceltrack.ingestion.normalize import is_valid_coordinate
from parceltrack.models._base import TrackingStatus
from parceltrack.models.record import TrackingRecord
from parceltrack.models.state import Location


class ResolvedLocations(NamedTuple):
    origin: Location
    current: Location
    destination: Location


def _endpoint(latitude: float | None, longitude: float | None, address: str | None) -> Location:
    return Location(latitude=latitude or 0.0, longitude=longitude or 0.0, address=address or "")


def midpoint(a: Location, b: Location) -> tuple[float, float]:
    """Arithmetic midpoint of two points (no great-circle correction)."""
    return ((a.latitude + b.latitude) / 2, (a.longitude + b.longitude) / 2)


def resolve_locations(record: TrackingRecord) -> ResolvedLocations:
    """Derive origin, current and destination for *record*.

    * ``pending``: current is the origin.
    * ``delivered``: current is the destination.
    * anything else: explicit current coordinates if the record has them,
      otherwise the origin/destination midpoint labelled "In Transit".

    Missing coordinates become ``(0, 0)``. The midpoint is only computed when
    both endpoints are plottable; otherwise current stays ``(0, 0)`` and the
    map renderer filters it out.
    """
    origin = _endpoint(record.pickup_latitude, record.pickup_longitude, record.pickup_location)
    destination = _endpoint(
        record.destination_latitude,
        record.destination_longitude,
        record.destination_location,
    )
    status = TrackingStatus.parse(record.status) if record.status else TrackingStatus.PENDING

    if status == TrackingStatus.PENDING:
        current = origin
    elif status == TrackingStatus.DELIVERED:
        current = destination
    elif record.has_explicit_current:
        current = Location(
            latitude=record.current_latitude or 0.0,
            longitude=record.current_longitude or 0.0,
            address=record.current_location or IN_TRANSIT_ADDRESS,
        )
    elif is_valid_coordinate(*origin.coordinates) and is_valid_coordinate(*destination.coordinates):
        lat, lng = midpoint(origin, destination)
        current = Location(latitude=lat, longitude=lng, address=IN_TRANSIT_ADDRESS)
    else:
        current = Location(address=IN_TRANSIT_ADDRESS)

    return ResolvedLocations(origin=origin, current=current, destination=destination)
