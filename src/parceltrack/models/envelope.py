"""Backend response envelope."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from parceltrack.models._base import ParcelBaseModel


class ApiEnvelope(ParcelBaseModel):
    """``{success, data, message}`` wrapper around every backend response."""

    success: bool = False
    data: dict[str, Any] | None = None
    message: str = ""
    status_code: int | None = None
    timestamp: str | None = Field(default=None)
