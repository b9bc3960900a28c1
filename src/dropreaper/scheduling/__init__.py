"""Periodic sweep scheduling.

Usage:
    controller = SweepController(registry, interval=1.0)
    controller.start()
"""

from dropreaper.scheduling.controller import SweepController

__all__ = [
    "SweepController",
]
