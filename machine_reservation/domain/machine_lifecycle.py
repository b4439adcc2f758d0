"""
Machine Lifecycle - Legal status transitions of a machine.

The store accepts any write; the workflows consult this table before
mutating a machine so only these transitions can happen:

    AVAILABLE --reserve--> AWAITING_DROPOFF --start_succeeded--> RUNNING
                           AWAITING_DROPOFF --start_failed-----> ERROR
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Final, Optional

from machine_reservation.core.value_objects import MachineRecord, MachineStatus


# =============================================================================
# Lifecycle Events
# =============================================================================


class MachineEvent(Enum):
    """Events that move a machine between statuses."""

    RESERVE = auto()            # A job claimed the machine
    START_SUCCEEDED = auto()    # The controller started the cycle
    START_FAILED = auto()       # The controller reported a hardware fault


TRANSITIONS: Final[dict[tuple[MachineStatus, MachineEvent], MachineStatus]] = {
    (MachineStatus.AVAILABLE, MachineEvent.RESERVE): MachineStatus.AWAITING_DROPOFF,
    (MachineStatus.AWAITING_DROPOFF, MachineEvent.START_SUCCEEDED): MachineStatus.RUNNING,
    (MachineStatus.AWAITING_DROPOFF, MachineEvent.START_FAILED): MachineStatus.ERROR,
}

# AWAITING_PICKUP has no producing transition yet; RUNNING -> AWAITING_PICKUP
# needs a cycle-complete workflow first.


# =============================================================================
# Transition Queries
# =============================================================================


def next_status(current: MachineStatus, event: MachineEvent) -> Optional[MachineStatus]:
    """
    Get the status an event leads to.

    Args:
        current: Current machine status.
        event: Event being applied.

    Returns:
        The next status, or None if the event is not allowed.
    """
    return TRANSITIONS.get((current, event))


def can_transition(current: MachineStatus, event: MachineEvent) -> bool:
    """Check whether an event is allowed from a status."""
    return (current, event) in TRANSITIONS


def is_reservable(machine: MachineRecord) -> bool:
    """Check whether a machine can be reserved."""
    return can_transition(machine.status, MachineEvent.RESERVE)


def is_startable(machine: MachineRecord) -> bool:
    """Check whether a machine's cycle can be started."""
    return can_transition(machine.status, MachineEvent.START_SUCCEEDED)


def first_reservable(machines: list[MachineRecord]) -> Optional[MachineRecord]:
    """
    Pick the machine to reserve.

    Args:
        machines: Candidates in store order.

    Returns:
        The first reservable machine, or None.
    """
    return next((m for m in machines if is_reservable(m)), None)
