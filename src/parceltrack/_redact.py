"""Helpers for safe debug logging.

Tracking responses embed the sender and receiver (names, phone numbers,
email addresses) and the delivery address. Those are masked before a
payload reaches a DEBUG log; tracking numbers, statuses and coordinates
are kept since they are what a debugging session needs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

REDACTED = "<redacted>"

# Whole embedded user objects.
_PARTY_KEYS: frozenset[str] = frozenset({"sender", "receiver", "recipient"})

# Individual contact or credential fields, wherever they appear.
_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "email",
        "phone",
        "firstname",
        "lastname",
        "recipientaddress",
        "recipientname",
        "recipientphone",
        "sendername",
        "senderphone",
        "token",
        "accesstoken",
        "authorization",
        "cookie",
        "password",
    }
)

_MAX_DEPTH = 20


def _summarize_party(value: Any) -> Any:
    """Keep only the shape of an embedded user: which fields were present."""
    if isinstance(value, Mapping):
        return {str(k): REDACTED for k in value}
    return REDACTED if value is not None else None


def _redact_mapping(value: Mapping[Any, Any], max_string: int, depth: int) -> dict[str, Any]:
    redacted: dict[str, Any] = {}
    for raw_key, item in value.items():
        key = str(raw_key)
        lowered = key.lower()
        if lowered in _PARTY_KEYS:
            redacted[key] = _summarize_party(item)
        elif lowered in _SENSITIVE_KEYS:
            redacted[key] = REDACTED
        else:
            redacted[key] = redact_for_log(item, max_string=max_string, _depth=depth + 1)
    return redacted


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a copy of a tracking payload that is safe to log.

    Embedded sender/receiver objects keep their keys but lose every value;
    contact and credential fields are masked at any depth. Strings longer
    than *max_string* are truncated.
    """
    if _depth > _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_string else f"{value[:max_string]}…<truncated>"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return _redact_mapping(value, max_string, _depth)
    if isinstance(value, Sequence):
        return [redact_for_log(item, max_string=max_string, _depth=_depth + 1) for item in value]
    return repr(value)
