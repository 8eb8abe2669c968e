from __future__ import annotations

import asyncio

import pytest

from parceltrack.poller import RefreshPoller


async def _wait_for(predicate, timeout: float = 1.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.005)


@pytest.mark.asyncio
async def test_poller_ticks_until_stopped() -> None:
    seen: list[str] = []

    async def tick(target: str) -> None:
        seen.append(target)

    poller = RefreshPoller(interval=0.01)
    handle = poller.start("SND1234567890", tick)
    await _wait_for(lambda: len(seen) >= 3)

    poller.stop()
    poller.stop()
    count = len(seen)
    await asyncio.sleep(0.05)

    assert not poller.is_active
    assert handle.cancelled
    assert len(seen) == count
    assert set(seen) == {"SND1234567890"}


@pytest.mark.asyncio
async def test_starting_again_replaces_the_previous_loop() -> None:
    seen: list[str] = []

    async def tick(target: str) -> None:
        seen.append(target)

    poller = RefreshPoller(interval=0.01)
    first = poller.start("AAAA1111", tick)
    second = poller.start("BBBB2222", tick)
    await asyncio.sleep(0)

    assert first.cancelled
    assert poller.handle is second
    assert poller.target == "BBBB2222"
    assert not poller.is_active_for("AAAA1111")

    await _wait_for(lambda: len(seen) >= 2)
    poller.stop()
    assert set(seen) == {"BBBB2222"}


@pytest.mark.asyncio
async def test_failing_tick_does_not_end_the_loop(caplog: pytest.LogCaptureFixture) -> None:
    calls = 0

    async def tick(target: str) -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("backend down")

    poller = RefreshPoller(interval=0.01)
    handle = poller.start("SND1234567890", tick)
    await _wait_for(lambda: calls >= 3)
    poller.stop()

    assert handle.ticks >= 3
    assert "Refresh tick 1 for SND1234567890 failed" in caplog.text


@pytest.mark.asyncio
async def test_first_tick_waits_one_interval() -> None:
    seen: list[str] = []

    async def tick(target: str) -> None:
        seen.append(target)

    poller = RefreshPoller(interval=10.0)
    poller.start("SND1234567890", tick)
    await asyncio.sleep(0.02)
    poller.stop()

    assert seen == []


@pytest.mark.asyncio
async def test_aclose_waits_for_cancelled_task() -> None:
    async def tick(target: str) -> None:
        return None

    poller = RefreshPoller(interval=60.0)
    handle = poller.start("SND1234567890", tick)
    await asyncio.sleep(0)

    await poller.aclose()
    await poller.aclose()

    assert handle.task is not None and handle.task.done()
    assert not poller.is_active
