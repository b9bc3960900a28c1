"""DropCleanup: binds simulation events to the registry and sweep controller.

The host's event dispatcher calls these handlers on its single callback
thread. Each handler is a thin translation onto one registry operation.

Usage:
    host = LocalHost()
    cleanup = DropCleanup.from_settings(host, CleanupSettings(capacity=8))

    cleanup.start()  # inside a running event loop
    cleanup.on_object_created(host.spawn("weapon_ak47"), kind="weapon_ak47")
    cleanup.on_round_boundary()
    await cleanup.stop()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Hashable

from dropreaper.config.settings import CleanupSettings
from dropreaper.host.protocol import ObjectHost
from dropreaper.registry.registry import DropRegistry
from dropreaper.scheduling.controller import SweepController
from dropreaper.tracing.protocol import HistoryStore

logger = logging.getLogger(__name__)


class DropCleanup:
    """Event-facing facade owning one registry and its sweep controller.

    Constructed at system init and torn down with stop(); nothing here is
    process-global.
    """

    def __init__(
        self,
        registry: DropRegistry,
        controller: SweepController,
        settings: CleanupSettings,
    ) -> None:
        self._registry = registry
        self._controller = controller
        self._settings = settings

    @classmethod
    def from_settings(
        cls,
        host: ObjectHost,
        settings: CleanupSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
        history: HistoryStore | None = None,
    ) -> DropCleanup:
        """Build registry and controller from validated settings.

        Args:
            host: Simulation that owns the dropped objects.
            settings: Validated configuration; loaded from the environment if None.
            clock: Monotonic time source shared by registry and controller.
            history: Optional sweep history store.
        """
        settings = settings or CleanupSettings()
        registry = DropRegistry(
            host,
            capacity=settings.capacity,
            lifetime=settings.lifetime,
            clock=clock,
        )
        controller = SweepController(
            registry,
            interval=settings.sweep_interval,
            clock=clock,
            history=history,
        )
        return cls(registry, controller, settings)

    @property
    def registry(self) -> DropRegistry:
        return self._registry

    @property
    def controller(self) -> SweepController:
        return self._controller

    @property
    def settings(self) -> CleanupSettings:
        return self._settings

    def on_object_created(self, reference: Hashable, kind: str | None = None) -> bool:
        """A player dropped an object.

        Args:
            reference: Handle of the new object.
            kind: Object class name, used to skip ignored kinds.

        Returns:
            True if the object is now tracked.
        """
        if kind is not None and kind in self._settings.ignored_kinds:
            logger.debug("Not tracking %s: kind %s is ignored", reference, kind)
            return False
        return self._registry.insert(reference)

    def on_object_consumed(self, reference: Hashable) -> bool:
        """An object was picked up or otherwise consumed by the simulation."""
        return self._registry.remove(reference)

    def on_round_boundary(self) -> None:
        """A round started; the simulation clears dropped objects itself."""
        self._registry.reset()

    def on_config_changed(self, capacity: int, lifetime: float) -> None:
        """Apply new bounds after validating them.

        Raises:
            pydantic.ValidationError: If either value is out of range. The
                registry is left untouched.
        """
        settings = self._settings.with_bounds(capacity, lifetime)
        self._settings = settings
        self._registry.update_config(settings.capacity, settings.lifetime)

    def start(self) -> None:
        """Start periodic sweeping on the running event loop."""
        self._controller.start()

    async def stop(self) -> None:
        """Stop sweeping and forget tracked records without destroying them."""
        await self._controller.stop()
