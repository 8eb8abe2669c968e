"""Repeating background refresh loop.

At most one loop is live per poller. Starting a new loop cancels the
previous one before anything is scheduled, and a failed tick never ends
the loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from parceltrack._constants import POLL_INTERVAL_SECONDS

_logger = logging.getLogger(__name__)

Tick = Callable[[str], Awaitable[None]]


@dataclass(slots=True, eq=False)
class PollHandle:
    """Cancellation token for one refresh loop."""

    target: str
    interval: float
    tick: Tick
    task: asyncio.Task[None] | None = None
    ticks: int = 0
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True
        if self.task is not None and not self.task.done():
            self.task.cancel()

    async def wait_closed(self) -> None:
        """Wait until the loop task has finished after :meth:`cancel`."""
        if self.task is None:
            return
        await asyncio.wait([self.task])


class RefreshPoller:
    """Idle / Active(target, handle) state machine around an asyncio task.

    Usage::

        poller = RefreshPoller(interval=30.0)
        poller.start("SND1234567890", refresh)
        ...
        poller.stop()
    """

    def __init__(self, *, interval: float = POLL_INTERVAL_SECONDS) -> None:
        self._interval = interval
        self._handle: PollHandle | None = None

    @property
    def handle(self) -> PollHandle | None:
        return self._handle

    @property
    def is_active(self) -> bool:
        return self._handle is not None

    @property
    def target(self) -> str | None:
        return self._handle.target if self._handle is not None else None

    def is_active_for(self, target: str) -> bool:
        return self._handle is not None and not self._handle.cancelled and self._handle.target == target

    def start(self, target: str, tick: Tick, *, interval: float | None = None) -> PollHandle:
        """Cancel any running loop, then run *tick(target)* every *interval* seconds.

        The first tick fires one interval after start. Must be called from
        a running event loop.
        """
        self.stop()
        handle = PollHandle(target=target, interval=interval if interval is not None else self._interval, tick=tick)
        handle.task = asyncio.get_running_loop().create_task(self._run(handle), name=f"parceltrack-poll-{target}")
        self._handle = handle
        _logger.debug("Started refresh loop for %s every %.1fs", target, handle.interval)
        return handle

    def stop(self) -> None:
        """Cancel the live loop if any. Idempotent."""
        handle = self._handle
        self._handle = None
        if handle is None:
            return
        handle.cancel()
        _logger.debug("Stopped refresh loop for %s after %d ticks", handle.target, handle.ticks)

    async def aclose(self) -> None:
        """Stop the live loop and wait for its task to finish."""
        handle = self._handle
        self.stop()
        if handle is not None:
            await handle.wait_closed()

    async def _run(self, handle: PollHandle) -> None:
        while not handle.cancelled:
            await asyncio.sleep(handle.interval)
            if handle.cancelled:
                return
            handle.ticks += 1
            try:
                await handle.tick(handle.target)
            except asyncio.CancelledError:
                raise
            except Exception:
                # Best-effort live location: keep polling on the next tick.
                _logger.warning("Refresh tick %d for %s failed", handle.ticks, handle.target, exc_info=True)
