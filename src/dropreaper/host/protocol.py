"""Host protocol: the capability boundary to the external simulation.

The registry never owns the objects it tracks. Every dereference goes through
an ObjectHost, which answers whether a handle still denotes a live object and
destroys objects on request.

Usage:
    host = LocalHost()
    registry = DropRegistry(host, capacity=10, lifetime=30.0)
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ObjectHost(Protocol):
    """Abstract simulation interface. Implementations own the actual objects."""

    def is_valid(self, reference: Hashable) -> bool:
        """Check whether the reference still denotes a live object.

        Must return False (never raise) for destroyed or recycled handles.
        """
        ...

    def destroy(self, reference: Hashable) -> None:
        """Destroy the referenced object.

        Callers re-validate before calling; see destroy_if_valid.
        """
        ...


def destroy_if_valid(host: ObjectHost, reference: Hashable) -> bool:
    """Destroy the object behind reference if it is still alive.

    Args:
        host: Simulation that owns the object.
        reference: Handle recorded earlier, possibly stale.

    Returns:
        True if the object was alive and has been destroyed, False if the
        handle was already invalid (a no-op).
    """
    if not host.is_valid(reference):
        return False
    host.destroy(reference)
    return True
