from __future__ import annotations

from datetime import UTC, datetime, timedelta

from parceltrack.display import format_relative_time

NOW = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)


def test_relative_time_buckets() -> None:
    assert format_relative_time(NOW - timedelta(seconds=30), now=NOW) == "Just now"
    assert format_relative_time(NOW - timedelta(minutes=5), now=NOW) == "5m ago"
    assert format_relative_time(NOW - timedelta(hours=3, minutes=20), now=NOW) == "3h ago"
    assert format_relative_time(NOW - timedelta(days=2, hours=1), now=NOW) == "2d ago"


def test_relative_time_falls_back_to_date() -> None:
    assert format_relative_time(datetime(2026, 3, 1, 9, 0, tzinfo=UTC), now=NOW) == "Mar 1"


def test_relative_time_treats_naive_values_as_utc() -> None:
    assert format_relative_time(datetime(2026, 3, 10, 11, 0), now=NOW) == "1h ago"


def test_relative_time_missing_value() -> None:
    assert format_relative_time(None, now=NOW) == "N/A"
