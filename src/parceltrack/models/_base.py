"""Base model and enums for tracking API payloads.

Every backend payload model inherits from :class:`ParcelBaseModel` which
provides:

* ``alias_generator=to_camel`` so camelCase API keys map
  automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips sentinel values
  (``""``, ``"--"``, NaN) so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

import enum
import math
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from parceltrack.ingestion.normalize import parse_timestamp, safe_float

# Sentinel strings the backend uses for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null"})


ApiTimestamp = Annotated[datetime | None, BeforeValidator(parse_timestamp)]
"""Annotated type that coerces ISO strings or epoch numbers to UTC datetimes."""

ApiFloat = Annotated[float | None, BeforeValidator(safe_float)]
"""Annotated type that coerces numeric strings and drops unparseable values."""


class TrackingStatus(enum.StrEnum):
    """Closed set of parcel statuses."""

    PENDING = "pending"
    PICKED_UP = "picked_up"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: Any) -> TrackingStatus | None:
        """Map a backend status (``"IN_TRANSIT"``, ``"in_transit"``) to a member.

        Returns ``None`` for values without a mapped member.
        """
        if value is None:
            return None
        if isinstance(value, TrackingStatus):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ServiceType(enum.StrEnum):
    LIGHT = "LIGHT"
    MEDIUM = "MEDIUM"
    HEAVY = "HEAVY"
    EXTRA_HEAVY = "EXTRA_HEAVY"

    @classmethod
    def parse(cls, value: Any) -> ServiceType:
        """Normalize ``"light_package"``, ``"Light Package"`` etc.; defaults to LIGHT."""
        if not value:
            return cls.LIGHT
        normalized = str(value).strip().upper().replace(" ", "_")
        normalized = normalized.removesuffix("_PACKAGE")
        try:
            return cls(normalized)
        except ValueError:
            return cls.LIGHT


class ParcelBaseModel(BaseModel):
    """Base for backend payload models.

    Handles:
    * camelCase → snake_case via ``alias_generator=to_camel``
    * sentinel values (``""``, ``"--"``, NaN) → dropped so the
      field default is used instead
    * Stashes the original API dict in ``raw``
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original API payload."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_api_values(cls, values: Any) -> Any:
        """Strip sentinel values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        cleaned = ParcelBaseModel._clean_dict(values)
        # Keep an explicitly supplied raw= (kwargs construction).
        if "raw" not in values:
            cleaned["raw"] = dict(values)
        return cleaned
