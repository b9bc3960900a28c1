"""Event handlers connecting the simulation's callbacks to the registry."""

from dropreaper.events.handlers import DropCleanup

__all__ = [
    "DropCleanup",
]
