"""Build a :class:`TrackingState` from a raw :class:`TrackingRecord`."""

from __future__ import annotations

from datetime import datetime, timedelta

from parceltrack._constants import DEFAULT_DELIVERY_DAYS, DELIVERY_DAYS_BY_SERVICE, UNKNOWN_PARTY
from parceltrack.ingestion.locations import resolve_locations
from parceltrack.ingestion.timeline import build_timeline
from parceltrack.models._base import ServiceType, TrackingStatus
from parceltrack.models.record import PartyRecord, TrackingRecord
from parceltrack.models.state import PartySummary, TrackingState


def parse_status(value: str | None) -> TrackingStatus:
    """Map a backend status onto the closed status set.

    Missing status means pending. Unrecognized values are treated like
    ``in_transit``, matching how the location resolver handles them.
    """
    if not value:
        return TrackingStatus.PENDING
    return TrackingStatus.parse(value) or TrackingStatus.IN_TRANSIT


def estimate_delivery(record: TrackingRecord) -> datetime | None:
    """Backend estimate, or creation time plus a per-service number of days."""
    if record.estimated_delivery is not None:
        return record.estimated_delivery
    if record.created_at is None:
        return None
    days = DELIVERY_DAYS_BY_SERVICE.get(record.service_type or "Light Package", DEFAULT_DELIVERY_DAYS)
    return record.created_at + timedelta(days=days)


def summarize_party(party: PartyRecord | None) -> PartySummary:
    if party is None or not party.full_name:
        return PartySummary(name=UNKNOWN_PARTY, phone=party.phone if party else "", email=party.email if party else "")
    return PartySummary(name=party.full_name, phone=party.phone, email=party.email)


def build_state(record: TrackingRecord, *, now: datetime) -> TrackingState:
    """Resolve locations and timeline and assemble the derived state.

    *now* stamps ``last_updated`` when the backend omits ``updatedAt``.
    """
    status = parse_status(record.status)
    locations = resolve_locations(record)
    return TrackingState(
        tracking_number=record.tracking_number,
        status=status,
        origin=locations.origin,
        current=locations.current,
        destination=locations.destination,
        events=tuple(build_timeline(record, status)),
        estimated_delivery=estimate_delivery(record),
        actual_delivery=record.actual_delivery,
        sender=summarize_party(record.sender),
        recipient=summarize_party(record.receiver),
        service_type=ServiceType.parse(record.service_type),
        weight=record.weight or 0.0,
        route=tuple(record.route_polyline),
        created_at=record.created_at,
        last_updated=record.updated_at or now,
    )
