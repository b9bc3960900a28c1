"""Periodic sweep driver.

Usage:
    controller = SweepController(registry, interval=1.0)

    # Inside a running event loop
    controller.start()
    ...
    await controller.stop()  # cancels the loop, resets the registry

    # Or drive it manually from a host timer callback
    controller.tick()
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from dropreaper.tracing.models import SweepRecord

if TYPE_CHECKING:
    from dropreaper.registry.registry import DropRegistry
    from dropreaper.tracing.protocol import HistoryStore

logger = logging.getLogger(__name__)


class SweepController:
    """Runs DropRegistry.sweep on a fixed period.

    One controller owns at most one sweep task, and tick() is synchronous, so
    sweeps never overlap. The controller tolerates an empty or disabled
    registry and bounds changing between ticks.

    Args:
        registry: Registry to sweep.
        interval: Seconds between sweeps.
        clock: Monotonic time source passed to sweep as "now".
        history: Optional store that receives one SweepRecord per tick.
    """

    def __init__(
        self,
        registry: DropRegistry,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        history: HistoryStore | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Sweep interval must be positive, got {interval}")
        self._registry = registry
        self._interval = interval
        self._clock = clock
        self._history = history
        self._ticks = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def ticks(self) -> int:
        """Sweeps performed so far."""
        return self._ticks

    def tick(self) -> int:
        """Sweep once at the current time.

        Returns:
            Number of records evicted.
        """
        tick, now = self._ticks, self._clock()
        evicted = self._registry.sweep(now)
        if self._history is not None:
            self._history.record_sweep(
                SweepRecord(
                    tick=tick,
                    timestamp=now,
                    evicted=evicted,
                    tracked=len(self._registry),
                )
            )
        self._ticks += 1
        if evicted:
            logger.debug("Sweep %d evicted %d records", tick, evicted)
        return evicted

    async def run(self) -> None:
        """Sweep every interval until cancelled.

        A failing tick is logged and the loop carries on with the next one.
        """
        while True:
            try:
                self.tick()
            except Exception:
                logger.exception("Sweep %d failed", self._ticks)
            await asyncio.sleep(self._interval)

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop.

        Raises:
            RuntimeError: If already running, or no event loop is running.
        """
        if self.running:
            raise RuntimeError("SweepController is already running")
        self._task = asyncio.get_running_loop().create_task(self.run(), name="dropreaper-sweep")
        logger.info("Sweep controller started (interval %.2fs)", self._interval)

    async def stop(self) -> None:
        """Cancel the sweep loop and forget all tracked records.

        No sweep runs after this returns. Records are cleared without
        destruction, even when the loop died with an error, which is then
        re-raised. Safe to call when not running.
        """
        task, self._task = self._task, None
        try:
            if task is not None:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                logger.info("Sweep controller stopped after %d sweeps", self._ticks)
        finally:
            self._registry.reset()
