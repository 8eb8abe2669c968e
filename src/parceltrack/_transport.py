"""HTTP client for the parcel tracking REST endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol
from urllib.parse import quote

import aiohttp
from pydantic import ValidationError

from parceltrack._constants import USER_AGENT
from parceltrack._redact import redact_for_log
from parceltrack.config import TrackingConfig
from parceltrack.exceptions import ParcelTrackError, TrackingApiError, TrackingTransportError
from parceltrack.models.envelope import ApiEnvelope
from parceltrack.models.record import TrackingRecord

_logger = logging.getLogger(__name__)


class TrackingBackend(Protocol):
    """Structural lookup interface consumed by the synchronizer.

    Test doubles only need an async ``fetch_tracking`` method.
    """

    async def fetch_tracking(self, tracking_number: str) -> TrackingRecord:
        ...


class HttpTrackingClient:
    """Looks parcels up via ``GET {base_url}/parcels/track/{number}``.

    Usage::

        async with HttpTrackingClient(config) as client:
            record = await client.fetch_tracking("SND1234567890")
    """

    def __init__(
        self,
        config: TrackingConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config or TrackingConfig()
        self._external_session = session is not None
        self._http = session

    async def __aenter__(self) -> HttpTrackingClient:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http is not None:
            await self._http.close()
        self._http = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http is None:
            raise ParcelTrackError("Client not initialized. Use 'async with HttpTrackingClient(...) as client:'")
        return self._http

    def url_for(self, tracking_number: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/parcels/track/{quote(tracking_number, safe='')}"

    async def fetch_tracking(self, tracking_number: str) -> TrackingRecord:
        """Fetch and parse one tracking record.

        Raises
        ------
        TrackingTransportError
            Network failure, non-JSON body or unparseable record.
        TrackingApiError
            The envelope reported ``success == false`` or carried no data.
        """
        http = self._require_session()
        url = self.url_for(tracking_number)
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s", url)

        try:
            async with http.get(url, headers=headers) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise TrackingTransportError(
                f"Request to {url} failed: {exc}",
                tracking_number=tracking_number,
                url=url,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TrackingTransportError(
                f"HTTP {status} from {url} with non-JSON body: {text[:200]}",
                tracking_number=tracking_number,
                status_code=status,
                url=url,
            ) from exc

        if not isinstance(body, dict):
            raise TrackingTransportError(
                f"Unexpected response shape from {url}",
                tracking_number=tracking_number,
                status_code=status,
                url=url,
            )

        _logger.debug("Response %s: %s", status, redact_for_log(body))

        try:
            envelope = ApiEnvelope.model_validate(body)
            if not envelope.success or not envelope.data:
                message = envelope.message or "Failed to track parcel"
                raise TrackingApiError(message, tracking_number=tracking_number, backend_message=envelope.message)
            return TrackingRecord.model_validate(envelope.data)
        except ValidationError as exc:
            raise TrackingTransportError(
                f"Malformed tracking response from {url}: {exc.error_count()} validation errors",
                tracking_number=tracking_number,
                status_code=status,
                url=url,
            ) from exc
