"""
Value Objects for the machine reservation service.

Immutable objects that represent values in the domain.
Value objects are compared by value, not by identity.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional


# =============================================================================
# Enums
# =============================================================================


class MachineStatus(Enum):
    """Operational status of a machine."""

    AVAILABLE = "AVAILABLE"                 # Idle and ready for a new job
    AWAITING_DROPOFF = "AWAITING_DROPOFF"   # Reserved, waiting for the cycle to be started
    RUNNING = "RUNNING"                     # Cycle in progress
    AWAITING_PICKUP = "AWAITING_PICKUP"     # Cycle complete, waiting for items to be collected
    ERROR = "ERROR"                         # Out of service


JOB_HOLDING_STATUSES: frozenset[MachineStatus] = frozenset(
    {
        MachineStatus.AWAITING_DROPOFF,
        MachineStatus.RUNNING,
        MachineStatus.AWAITING_PICKUP,
    }
)


# =============================================================================
# Machine Record Value Object
# =============================================================================


@dataclass(frozen=True)
class MachineRecord:
    """
    Immutable state of a single machine.

    Updates produce a new record, so a record handed out by the store
    never changes underneath its holder.

    Attributes:
        machine_id: Unique, immutable machine identifier.
        location_id: Location the machine belongs to.
        current_job_id: Job occupying the machine, if any.
        status: Current operational status.
    """

    machine_id: str
    location_id: str
    current_job_id: Optional[str] = None
    status: MachineStatus = MachineStatus.AVAILABLE

    @property
    def is_available(self) -> bool:
        """Check if the machine can be reserved."""
        return self.status == MachineStatus.AVAILABLE

    @property
    def holds_job(self) -> bool:
        """Check if the machine's status allows a current job."""
        return self.status in JOB_HOLDING_STATUSES

    def with_status(self, status: MachineStatus) -> "MachineRecord":
        """Return a copy with a different status."""
        return replace(self, status=status)

    def with_job_id(self, job_id: Optional[str]) -> "MachineRecord":
        """Return a copy with a different job id."""
        return replace(self, current_job_id=job_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "machineId": self.machine_id,
            "locationId": self.location_id,
            "currentJobId": self.current_job_id,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MachineRecord":
        """Create a record from its dictionary form."""
        return cls(
            machine_id=data["machineId"],
            location_id=data["locationId"],
            current_job_id=data.get("currentJobId"),
            status=MachineStatus(data.get("status", MachineStatus.AVAILABLE.value)),
        )
