"""
Domain layer - Business rules of the machine lifecycle.
"""

from .machine_lifecycle import (
    MachineEvent,
    TRANSITIONS,
    next_status,
    can_transition,
    is_reservable,
    is_startable,
    first_reservable,
)


__all__ = [
    "MachineEvent",
    "TRANSITIONS",
    "next_status",
    "can_transition",
    "is_reservable",
    "is_startable",
    "first_reservable",
]
