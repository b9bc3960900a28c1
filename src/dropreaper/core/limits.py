"""Bounds shared by the config boundary and the registry it guards."""

MAX_CAPACITY = 31
"""Largest number of dropped objects a registry may track."""
