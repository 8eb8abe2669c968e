"""Tracking number validation and display formatting."""

from __future__ import annotations

from parceltrack._constants import TRACKING_NUMBER_PATTERNS
from parceltrack.exceptions import TrackingValidationError


def normalize_tracking_number(value: str) -> str:
    """Strip surrounding whitespace and uppercase."""
    return value.strip().upper()


def is_valid_tracking_number(value: str | None) -> bool:
    if not value:
        return False
    cleaned = normalize_tracking_number(value)
    return any(pattern.match(cleaned) for pattern in TRACKING_NUMBER_PATTERNS)


def validate_tracking_number(value: str | None) -> str:
    """Return the normalized number or raise :class:`TrackingValidationError`."""
    if value is None or not value.strip():
        raise TrackingValidationError("Please enter a tracking number.", tracking_number=value or "")
    if not is_valid_tracking_number(value):
        raise TrackingValidationError(f"Invalid tracking number format: {value!r}", tracking_number=value)
    return normalize_tracking_number(value)


def format_tracking_number(value: str | None) -> str:
    """Group long numbers in blocks of four for display (``SND1 2345 6789 0``)."""
    if not value:
        return ""
    cleaned = normalize_tracking_number(value)
    if len(cleaned) < 10:
        return cleaned
    return " ".join(cleaned[i : i + 4] for i in range(0, len(cleaned), 4))
