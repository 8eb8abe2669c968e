"""Human-facing formatting of timestamps."""

from __future__ import annotations

from datetime import UTC, datetime


def format_relative_time(timestamp: datetime | None, *, now: datetime | None = None) -> str:
    """Render *timestamp* as ``Just now``, ``5m ago``, ``3h ago``, ``2d ago`` or ``Mar 4``."""
    if timestamp is None:
        return "N/A"
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    now = now or datetime.now(UTC)
    elapsed = (now - timestamp).total_seconds()
    minutes = int(elapsed // 60)
    hours = int(elapsed // 3600)
    days = int(elapsed // 86400)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return f"{timestamp:%b} {timestamp.day}"
