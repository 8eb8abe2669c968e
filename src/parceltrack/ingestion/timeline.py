"""Event timeline normalization.

Backend-supplied events are trusted as-is and only sorted. When the backend
sends no events at all, a canonical progression is synthesized from the
creation timestamp and the current status.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from parceltrack._constants import (
    DELIVERED_OFFSET_HOURS,
    FIRST_TRANSIT_OFFSET_HOURS,
    PICKED_UP_OFFSET_HOURS,
    SECOND_TRANSIT_OFFSET_HOURS,
)
from parceltrack.models._base import TrackingStatus
from parceltrack.models.record import TrackingRecord
from parceltrack.models.state import TrackingEvent

_PICKED_UP_OR_LATER = frozenset({TrackingStatus.PICKED_UP, TrackingStatus.IN_TRANSIT, TrackingStatus.DELIVERED})
_IN_TRANSIT_OR_LATER = frozenset({TrackingStatus.IN_TRANSIT, TrackingStatus.DELIVERED})

_EPOCH = datetime.fromtimestamp(0, tz=UTC)


def _sort_key(event: TrackingEvent) -> datetime:
    # Events without a timestamp sort first; sorted() keeps their relative order.
    return event.timestamp or _EPOCH


def sort_events(events: Iterable[TrackingEvent]) -> list[TrackingEvent]:
    """Return a new list ordered by ascending timestamp (stable)."""
    return sorted(events, key=_sort_key)


def synthesize_events(
    created_at: datetime,
    status: TrackingStatus | None,
    *,
    delivery_location: str = "",
) -> list[TrackingEvent]:
    """Build a plausible history for a parcel with no recorded events.

    The schedule is a product choice (info received at T+0, pickup at T+2h,
    transit at T+24h and T+48h, delivery at T+50h). A later stage is only
    emitted when every earlier stage applies.
    """
    events = [
        TrackingEvent(
            id="1",
            timestamp=created_at,
            status=TrackingStatus.PENDING,
            location="Origin Facility",
            description="Package information received",
            details="Your package has been processed and is ready for pickup",
        )
    ]
    if status not in _PICKED_UP_OR_LATER:
        return events

    events.append(
        TrackingEvent(
            id="2",
            timestamp=created_at + timedelta(hours=PICKED_UP_OFFSET_HOURS),
            status=TrackingStatus.PICKED_UP,
            location="Pickup Location",
            description="Package picked up",
            details="Package has been collected and is en route to sorting facility",
        )
    )
    if status not in _IN_TRANSIT_OR_LATER:
        return events

    events.append(
        TrackingEvent(
            id="3",
            timestamp=created_at + timedelta(hours=FIRST_TRANSIT_OFFSET_HOURS),
            status=TrackingStatus.IN_TRANSIT,
            location="Sorting Facility",
            description="In transit to destination",
            details="Package is being transported to destination facility",
        )
    )
    events.append(
        TrackingEvent(
            id="4",
            timestamp=created_at + timedelta(hours=SECOND_TRANSIT_OFFSET_HOURS),
            status=TrackingStatus.IN_TRANSIT,
            location="Local Facility",
            description="In transit",
            details="Package is on the delivery vehicle and will be delivered today",
        )
    )
    if status != TrackingStatus.DELIVERED:
        return events

    events.append(
        TrackingEvent(
            id="5",
            timestamp=created_at + timedelta(hours=DELIVERED_OFFSET_HOURS),
            status=TrackingStatus.DELIVERED,
            location=delivery_location,
            description="Package delivered",
            details="Package has been successfully delivered to recipient",
        )
    )
    return events


def build_timeline(record: TrackingRecord, status: TrackingStatus | None) -> list[TrackingEvent]:
    """Return the ascending event history for *record*.

    A backend list, even an empty one or one missing stages, is sorted and
    returned without synthesis; only an absent list is synthesized.
    Synthesis needs an anchor time, so a record with neither ``createdAt``
    nor ``updatedAt`` yields an empty timeline.
    """
    if record.events is not None:
        return sort_events(record.events)

    anchor = record.created_at or record.updated_at
    if anchor is None:
        return []
    delivery_location = record.recipient_address or record.destination_location or ""
    return sort_events(synthesize_events(anchor, status, delivery_location=delivery_location))
