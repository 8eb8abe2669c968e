from __future__ import annotations

from datetime import UTC, datetime, timedelta

from conftest import make_payload

from parceltrack.ingestion.timeline import build_timeline, sort_events, synthesize_events
from parceltrack.models import TrackingEvent, TrackingRecord, TrackingStatus

CREATED = datetime(2026, 3, 1, 8, 0, tzinfo=UTC)


def test_synthesized_delivered_timeline_follows_schedule() -> None:
    events = synthesize_events(CREATED, TrackingStatus.DELIVERED, delivery_location="Westlands, Nairobi")

    assert [e.id for e in events] == ["1", "2", "3", "4", "5"]
    assert [e.timestamp - CREATED for e in events] == [
        timedelta(0),
        timedelta(hours=2),
        timedelta(hours=24),
        timedelta(hours=48),
        timedelta(hours=50),
    ]
    assert events[-1].status == TrackingStatus.DELIVERED
    assert events[-1].location == "Westlands, Nairobi"


def test_synthesized_stages_stop_at_current_status() -> None:
    assert len(synthesize_events(CREATED, TrackingStatus.PENDING)) == 1
    assert len(synthesize_events(CREATED, TrackingStatus.PICKED_UP)) == 2
    assert len(synthesize_events(CREATED, TrackingStatus.IN_TRANSIT)) == 4
    assert len(synthesize_events(CREATED, TrackingStatus.CANCELLED)) == 1


def test_backend_events_are_sorted_not_synthesized() -> None:
    record = TrackingRecord.model_validate(
        make_payload(
            events=[
                {"id": 2, "timestamp": "2026-03-02T09:00:00Z", "status": "IN_TRANSIT", "description": "Moving"},
                {"id": 1, "timestamp": "2026-03-01T09:00:00Z", "status": "PICKED_UP", "description": "Collected"},
            ]
        )
    )

    events = build_timeline(record, TrackingStatus.DELIVERED)

    assert [e.id for e in events] == ["1", "2"]
    assert events[0].status == TrackingStatus.PICKED_UP


def test_empty_backend_event_list_is_kept() -> None:
    record = TrackingRecord.model_validate(make_payload(events=[]))
    assert build_timeline(record, TrackingStatus.IN_TRANSIT) == []


def test_absent_events_are_synthesized_with_delivery_address() -> None:
    record = TrackingRecord.model_validate(make_payload(status="DELIVERED"))
    events = build_timeline(record, TrackingStatus.DELIVERED)

    assert events[0].timestamp == CREATED
    assert events[-1].location == "Westlands, Nairobi"


def test_no_anchor_time_yields_empty_timeline() -> None:
    record = TrackingRecord.model_validate(make_payload(createdAt=None, updatedAt=None))
    assert build_timeline(record, TrackingStatus.IN_TRANSIT) == []


def test_sort_is_stable_for_missing_timestamps() -> None:
    events = [
        TrackingEvent(id="b", timestamp=CREATED),
        TrackingEvent(id="x"),
        TrackingEvent(id="y"),
    ]
    assert [e.id for e in sort_events(events)] == ["x", "y", "b"]
