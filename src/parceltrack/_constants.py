"""Internal constants shared across the library."""

from __future__ import annotations

import re

BASE_URL = "http://localhost:3000/api/v1"
USER_AGENT = "parceltrack/0.1"

#: Seconds a cached tracking state stays fresh.
CACHE_TTL_SECONDS: float = 5 * 60
#: Seconds between background refreshes in real-time mode.
POLL_INTERVAL_SECONDS: float = 30.0
#: Seconds before a lookup is abandoned as a fetch error.
FETCH_TIMEOUT_SECONDS: float = 10.0

HISTORY_LIMIT = 10
HISTORY_KEY = "tracking_history"

# ------------------------------------------------------------------
# Tracking number formats
# ------------------------------------------------------------------

TRACKING_NUMBER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^[A-Z]{2}\d{9}[A-Z]{2}$"),  # international, e.g. AB123456789CD
    re.compile(r"^\d{10,20}$"),
    re.compile(r"^[A-Z0-9]{8,20}$"),
)

# ------------------------------------------------------------------
# Address labels used when the backend omits them
# ------------------------------------------------------------------

IN_TRANSIT_ADDRESS = "In Transit"
UNKNOWN_PARTY = "Unknown"

# ------------------------------------------------------------------
# Synthesized timeline schedule (hours after creation)
# ------------------------------------------------------------------

PICKED_UP_OFFSET_HOURS = 2
FIRST_TRANSIT_OFFSET_HOURS = 24
SECOND_TRANSIT_OFFSET_HOURS = 48
DELIVERED_OFFSET_HOURS = 50

# ------------------------------------------------------------------
# Estimated delivery (days after creation) keyed by backend service label
# ------------------------------------------------------------------

DELIVERY_DAYS_BY_SERVICE: dict[str, int] = {
    "Light Package": 2,
    "Medium Package": 1,
}
DEFAULT_DELIVERY_DAYS = 3

# ------------------------------------------------------------------
# Map rendering
# ------------------------------------------------------------------

MAP_BOUNDS_PADDING = 0.1
SINGLE_POINT_ZOOM = 12
