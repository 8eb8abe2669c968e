from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from parceltrack.ingestion.state import build_state
from parceltrack.models import TrackingRecord, TrackingState

T0 = datetime(2026, 3, 1, 8, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    now: datetime = T0

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class FakeBackend:
    """Counts lookups and returns a record built from a payload template."""

    payload: dict[str, Any]
    calls: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def fetch_tracking(self, tracking_number: str) -> TrackingRecord:
        self.calls.append(tracking_number)
        if self.error is not None:
            raise self.error
        return TrackingRecord.model_validate({**self.payload, "trackingNumber": tracking_number})


def make_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": 42,
        "trackingNumber": "SND1234567890",
        "status": "IN_TRANSIT",
        "pickupLocation": "Chuka University, Chuka",
        "pickupLatitude": -0.3346,
        "pickupLongitude": 37.6359,
        "destinationLocation": "Westlands, Nairobi",
        "destinationLatitude": -1.2648,
        "destinationLongitude": 36.8001,
        "recipientAddress": "Westlands, Nairobi",
        "weight": 2.5,
        "serviceType": "Light Package",
        "sender": {"firstName": "Jane", "lastName": "Wanjiru", "phone": "+254700000001", "email": "jane@example.com"},
        "receiver": {"firstName": "Otieno", "lastName": "Kamau", "phone": "+254700000002", "email": "ok@example.com"},
        "createdAt": "2026-03-01T08:00:00Z",
        "updatedAt": "2026-03-02T10:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def payload() -> dict[str, Any]:
    return make_payload()


@pytest.fixture
def record(payload: dict[str, Any]) -> TrackingRecord:
    return TrackingRecord.model_validate(payload)


@pytest.fixture
def state(record: TrackingRecord) -> TrackingState:
    return build_state(record, now=T0)
