"""Fixed-rate scheduler for the reaper tick.

Process-owned lifecycle state with explicit start/stop. Ticks fire on a
fixed wall-clock cadence regardless of how long the previous tick took:
an overrunning tick is not awaited before the next one starts, and ticks
are never skipped or coalesced. Every tick is guarded so a failure is
logged and never stops future ticks.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

from reaper.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class FixedRateScheduler:
    """Runs tick() every interval on the current event loop."""

    def __init__(
        self,
        tick: Callable[[], Awaitable[Any]],
        interval: timedelta,
        initial_delay: float = 0.0,
        name: str = "reaper",
    ) -> None:
        if interval <= timedelta(0):
            raise ValueError("interval must be positive")
        self._tick = tick
        self._interval = interval.total_seconds()
        self._initial_delay = max(initial_delay, 0.0)
        self._name = name
        self._loop_task: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[None]] = set()
        self.ticks_started = 0

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def start(self) -> None:
        """Start the timer loop. Must be called from a running event loop."""
        if self.running:
            return
        self._loop_task = asyncio.create_task(self._run(), name=f"{self._name}-scheduler")
        logger.info(
            "%s scheduler started: interval=%ss initial_delay=%ss",
            self._name,
            self._interval,
            self._initial_delay,
        )

    async def stop(self) -> None:
        """Stop firing new ticks and wait for in-flight ticks to finish."""
        if self._loop_task is not None:
            self._loop_task.cancel()
            try:
                await self._loop_task
            except asyncio.CancelledError:
                pass
            self._loop_task = None
        if self._in_flight:
            logger.info("Waiting for %s in-flight %s tick(s)", len(self._in_flight), self._name)
            await asyncio.gather(*self._in_flight, return_exceptions=True)
        logger.info("%s scheduler stopped", self._name)

    async def run_once(self) -> None:
        """Run one guarded tick inline (tests, one-shot scripts)."""
        await self._guarded_tick()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self._initial_delay
        while True:
            delay = next_at - loop.time()
            if delay > 0:
                await asyncio.sleep(delay)
            task = asyncio.create_task(self._guarded_tick())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            self.ticks_started += 1
            next_at += self._interval

    async def _guarded_tick(self) -> None:
        try:
            await self._tick()
        except Exception:
            logger.exception("%s tick failed; next tick is unaffected", self._name)
