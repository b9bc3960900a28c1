"""dropreaper: bounded cleanup of dropped objects in a live simulation.

Usage:
    from dropreaper import CleanupSettings, DropCleanup, LocalHost

    host = LocalHost()
    cleanup = DropCleanup.from_settings(host, CleanupSettings(capacity=2, lifetime=30.0))

    for kind in ("weapon_ak47", "weapon_m4a1", "weapon_awp"):
        cleanup.on_object_created(host.spawn(kind), kind=kind)
    # The ak47 was evicted and destroyed to make room for the awp.

    cleanup.controller.tick()  # or cleanup.start() inside an event loop
"""

__version__ = "0.1.0"

# Core primitives
from dropreaper.core import ObjectRef

# Configuration
from dropreaper.config import CleanupSettings

# Event surface
from dropreaper.events import DropCleanup

# Hosts
from dropreaper.host import (
    HandleAllocator,
    LocalHost,
    ObjectHost,
    destroy_if_valid,
)

# Registry
from dropreaper.registry import (
    MAX_CAPACITY,
    DropRegistry,
    DuplicateReferenceError,
    EvictionReason,
    RegistryStats,
    TrackedObject,
)

# Scheduling
from dropreaper.scheduling import SweepController

# Tracing (optional)
from dropreaper.tracing import (
    HistoryStore,
    InMemoryHistoryStore,
    SweepRecord,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "ObjectRef",
    # Hosts
    "ObjectHost",
    "LocalHost",
    "HandleAllocator",
    "destroy_if_valid",
    # Registry
    "DropRegistry",
    "TrackedObject",
    "EvictionReason",
    "RegistryStats",
    "DuplicateReferenceError",
    "MAX_CAPACITY",
    # Scheduling
    "SweepController",
    # Config
    "CleanupSettings",
    # Events
    "DropCleanup",
    # Tracing
    "HistoryStore",
    "InMemoryHistoryStore",
    "SweepRecord",
]
