"""
Core module - Foundation layer with no external dependencies.

Contains:
- Exceptions
- Interfaces (Protocols)
- Value Objects
"""

from .exceptions import (
    ReservationSystemError,
    AuthenticationError,
    Unauthorized,
    MachineControlError,
    HardwareFault,
    RepositoryError,
    DuplicateMachineError,
)
from .interfaces import (
    CostRecorder,
    MachineRepository,
    RecordCache,
    IdentityProvider,
    MachineController,
)
from .value_objects import (
    MachineStatus,
    MachineRecord,
    JOB_HOLDING_STATUSES,
)


__all__ = [
    # Exceptions
    "ReservationSystemError",
    "AuthenticationError",
    "Unauthorized",
    "MachineControlError",
    "HardwareFault",
    "RepositoryError",
    "DuplicateMachineError",
    # Interfaces
    "CostRecorder",
    "MachineRepository",
    "RecordCache",
    "IdentityProvider",
    "MachineController",
    # Value Objects
    "MachineStatus",
    "MachineRecord",
    "JOB_HOLDING_STATUSES",
]
