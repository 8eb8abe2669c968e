"""Search history item model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from parceltrack.models._base import TrackingStatus


class HistoryItem(BaseModel):
    """One past lookup. Serialized with camelCase keys (``trackingNumber``, ``searchedAt``)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    tracking_number: str
    searched_at: datetime
    status: TrackingStatus
