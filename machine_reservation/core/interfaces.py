"""
Interfaces (Protocols) for the machine reservation service.

Defines contracts for the store, cache and external clients the
workflow engine depends on, using Python's Protocol for structural
subtyping (duck typing with type hints).
"""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar, runtime_checkable

from .value_objects import MachineRecord, MachineStatus


T = TypeVar("T")


# =============================================================================
# Cost Accounting Interface
# =============================================================================


@runtime_checkable
class CostRecorder(Protocol):
    """Protocol for anything that can be charged simulated cost."""

    def record(self, consumer_name: str, units: float) -> None:
        """Add units to the total and to the consumer's share."""
        ...


# =============================================================================
# Storage Interfaces
# =============================================================================


@runtime_checkable
class MachineRepository(Protocol):
    """Protocol for the authoritative machine store."""

    def list_at_location(self, location_id: str) -> list[MachineRecord]:
        """List machines at a location, in store order."""
        ...

    def get(self, machine_id: str) -> Optional[MachineRecord]:
        """Get a machine by id."""
        ...

    def set_job_id(self, machine_id: str, job_id: str) -> None:
        """Set the current job id of a machine."""
        ...

    def set_status(self, machine_id: str, status: MachineStatus) -> None:
        """Set the status of a machine."""
        ...


class RecordCache(Protocol[T]):
    """Protocol for a string-keyed read cache."""

    def get(self, key: str) -> Optional[T]:
        """Get a cached value, or None on a miss."""
        ...

    def put(self, key: str, value: T) -> None:
        """Insert or overwrite a cached value."""
        ...


# =============================================================================
# External Client Interfaces
# =============================================================================


@runtime_checkable
class IdentityProvider(Protocol):
    """Protocol for the identity provider."""

    def validate_token(self, token: str) -> bool:
        """Check whether a token is valid."""
        ...

    def identify(self, token: str) -> str:
        """Get the user id behind a token."""
        ...


@runtime_checkable
class MachineController(Protocol):
    """Protocol for the physical machine controller."""

    def status(self, machine_id: str) -> MachineStatus:
        """Get the status reported by the machine."""
        ...

    def start_cycle(self, machine_id: str) -> None:
        """
        Start a machine's cycle.

        Raises:
            HardwareFault: If the machine failed to start.
        """
        ...

    def force_stop(self, machine_id: str) -> None:
        """Forcibly stop a machine."""
        ...
