"""Custom exception hierarchy for parceltrack."""

from __future__ import annotations


class ParcelTrackError(Exception):
    """Base exception for all parceltrack errors."""


class TrackingConfigError(ParcelTrackError):
    """Invalid configuration value."""


class TrackingValidationError(ParcelTrackError):
    """Tracking number does not match any accepted format.

    Raised before any I/O is attempted.
    """

    def __init__(self, message: str, *, tracking_number: str = "") -> None:
        self.tracking_number = tracking_number
        super().__init__(message)


class TrackingFetchError(ParcelTrackError):
    """A tracking lookup failed (network, timeout or backend-reported)."""

    def __init__(self, message: str, *, tracking_number: str = "") -> None:
        self.tracking_number = tracking_number
        super().__init__(message)


class TrackingTransportError(TrackingFetchError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        tracking_number: str = "",
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message, tracking_number=tracking_number)


class TrackingTimeoutError(TrackingFetchError):
    """The lookup did not complete within the configured timeout."""


class TrackingApiError(TrackingFetchError):
    """Backend envelope reported ``success == false``."""

    def __init__(
        self,
        message: str,
        *,
        tracking_number: str = "",
        backend_message: str = "",
    ) -> None:
        self.backend_message = backend_message
        super().__init__(message, tracking_number=tracking_number)
