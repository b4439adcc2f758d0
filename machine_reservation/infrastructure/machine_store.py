"""
Machine Store - Authoritative in-memory store of machine records.

Records are immutable, so every read hands out a value the caller can
keep without ever seeing later store updates through it.
"""

from __future__ import annotations

from typing import Iterable, Optional

from machine_reservation.core.exceptions import DuplicateMachineError
from machine_reservation.core.interfaces import CostRecorder
from machine_reservation.core.value_objects import MachineRecord, MachineStatus
from machine_reservation.loggers import logger
from machine_reservation.simulation.accountant import ResourceConsumer
from machine_reservation.simulation.units import (
    CONNECTION,
    DATABASE_LAZY_WRITE,
    DATABASE_READ,
    DATABASE_WRITE,
)


class MachineStore(ResourceConsumer):
    """
    Store of machine records keyed by machine id.

    Every read and update counts as one store access. Updates accept any
    status; lifecycle rules are enforced by the workflows, not here.
    """

    def __init__(
        self,
        accountant: CostRecorder,
        machines: Iterable[MachineRecord] = (),
        consumer_name: Optional[str] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            accountant: Recorder the costs are charged to.
            machines: Records to seed the store with, in store order.
            consumer_name: Name to attribute costs to.

        Raises:
            DuplicateMachineError: If two seed records share an id.
        """
        super().__init__(accountant, consumer_name)
        self._machines: dict[str, MachineRecord] = {}
        self.access_count = 0

        for machine in machines:
            self.add(machine)

        self._consume(CONNECTION)

    def add(self, machine: MachineRecord) -> None:
        """
        Seed a machine record. Not charged, not counted as an access.

        Args:
            machine: Record to add.

        Raises:
            DuplicateMachineError: If the id is already stored.
        """
        if machine.machine_id in self._machines:
            raise DuplicateMachineError(
                f"Machine already stored: {machine.machine_id}",
                details={"machine": machine.machine_id},
            )
        self._machines[machine.machine_id] = machine

    def list_at_location(self, location_id: str) -> list[MachineRecord]:
        """
        List machines at a location.

        Args:
            location_id: Location to search.

        Returns:
            Records at the location, in store order.
        """
        self.access_count += 1
        self._consume(DATABASE_READ)
        return [m for m in self._machines.values() if m.location_id == location_id]

    def get(self, machine_id: str) -> Optional[MachineRecord]:
        """
        Get a machine by id.

        Args:
            machine_id: Machine to fetch.

        Returns:
            The record, or None if unknown.
        """
        self.access_count += 1
        self._consume(DATABASE_READ)
        return self._machines.get(machine_id)

    def set_job_id(self, machine_id: str, job_id: Optional[str]) -> None:
        """
        Set a machine's current job id. Unknown ids are ignored.

        Args:
            machine_id: Machine to update.
            job_id: New job id.
        """
        self.access_count += 1
        self._consume(DATABASE_LAZY_WRITE)
        machine = self._machines.get(machine_id)
        if machine is None:
            logger.debug(f"Ignoring job id update for unknown machine {machine_id}")
            return
        self._machines[machine_id] = machine.with_job_id(job_id)

    def set_status(self, machine_id: str, status: MachineStatus) -> None:
        """
        Set a machine's status. Unknown ids are ignored.

        Args:
            machine_id: Machine to update.
            status: New status.
        """
        self.access_count += 1
        self._consume(DATABASE_WRITE)
        machine = self._machines.get(machine_id)
        if machine is None:
            logger.debug(f"Ignoring status update for unknown machine {machine_id}")
            return
        self._machines[machine_id] = machine.with_status(status)

    def __contains__(self, machine_id: object) -> bool:
        return machine_id in self._machines

    def __len__(self) -> int:
        return len(self._machines)
