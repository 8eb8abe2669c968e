from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import test_utils, web
from conftest import make_payload

from parceltrack._transport import HttpTrackingClient
from parceltrack.config import TrackingConfig
from parceltrack.exceptions import ParcelTrackError, TrackingApiError, TrackingTransportError
from parceltrack.models import TrackingRecord

async def _track(request: web.Request) -> web.StreamResponse:
    number = request.match_info["number"]
    if number == "SND1234567890":
        return web.json_response({"success": True, "data": make_payload(), "message": "Parcel found"})
    if number == "GARBAGE0001":
        return web.Response(text="<html>bad gateway</html>", status=502)
    if number == "WRONGSHAPE1":
        return web.json_response({"success": True, "data": {"status": "IN_TRANSIT"}})
    return web.json_response({"success": False, "message": "Parcel not found", "statusCode": 404}, status=404)


@pytest_asyncio.fixture
async def server() -> AsyncIterator[test_utils.TestServer]:
    app = web.Application()
    app.router.add_get("/api/v1/parcels/track/{number}", _track)
    test_server = test_utils.TestServer(app)
    await test_server.start_server()
    yield test_server
    await test_server.close()


def _config(server: test_utils.TestServer) -> TrackingConfig:
    return TrackingConfig(base_url=str(server.make_url("/api/v1")))


@pytest.mark.asyncio
async def test_fetch_tracking_parses_record(server: test_utils.TestServer) -> None:
    async with HttpTrackingClient(_config(server)) as client:
        record = await client.fetch_tracking("SND1234567890")

    assert isinstance(record, TrackingRecord)
    assert record.tracking_number == "SND1234567890"
    assert record.pickup_latitude == -0.3346


@pytest.mark.asyncio
async def test_backend_failure_envelope_raises_api_error(server: test_utils.TestServer) -> None:
    async with HttpTrackingClient(_config(server)) as client:
        with pytest.raises(TrackingApiError) as excinfo:
            await client.fetch_tracking("MISSING0001")

    assert excinfo.value.backend_message == "Parcel not found"
    assert excinfo.value.tracking_number == "MISSING0001"


@pytest.mark.asyncio
async def test_non_json_body_raises_transport_error(server: test_utils.TestServer) -> None:
    async with HttpTrackingClient(_config(server)) as client:
        with pytest.raises(TrackingTransportError) as excinfo:
            await client.fetch_tracking("GARBAGE0001")

    assert excinfo.value.status_code == 502


@pytest.mark.asyncio
async def test_record_without_tracking_number_raises_transport_error(server: test_utils.TestServer) -> None:
    async with HttpTrackingClient(_config(server)) as client:
        with pytest.raises(TrackingTransportError, match="Malformed tracking response"):
            await client.fetch_tracking("WRONGSHAPE1")


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error() -> None:
    async with HttpTrackingClient(TrackingConfig(base_url="http://127.0.0.1:1/api/v1")) as client:
        with pytest.raises(TrackingTransportError):
            await client.fetch_tracking("SND1234567890")


@pytest.mark.asyncio
async def test_client_requires_context_manager() -> None:
    client = HttpTrackingClient()
    with pytest.raises(ParcelTrackError, match="not initialized"):
        await client.fetch_tracking("SND1234567890")


def test_url_quotes_tracking_number() -> None:
    client = HttpTrackingClient(TrackingConfig(base_url="https://parcels.example/api/v1/"))
    assert client.url_for("AB 12/3") == "https://parcels.example/api/v1/parcels/track/AB%2012%2F3"


@pytest.mark.asyncio
async def test_out_of_range_timestamp_is_dropped() -> None:
    async def handler(request: web.Request) -> web.StreamResponse:
        return web.json_response({"success": True, "data": make_payload(createdAt=10**20)})

    app = web.Application()
    app.router.add_get("/api/v1/parcels/track/{number}", handler)
    test_server = test_utils.TestServer(app)
    await test_server.start_server()
    try:
        async with HttpTrackingClient(_config(test_server)) as client:
            record = await client.fetch_tracking("SND1234567890")
    finally:
        await test_server.close()

    assert record.created_at is None
