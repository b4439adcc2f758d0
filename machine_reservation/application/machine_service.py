"""
Machine Service - Reserve, inspect and start workflows.

Coordinates the machine store, the read cache and the machine controller.
Every mutation is followed by a re-read from the store, and the fresh
record is written through to the cache before it is returned.
"""

from __future__ import annotations

from machine_reservation.application.models import WorkflowResult
from machine_reservation.core.exceptions import HardwareFault
from machine_reservation.core.interfaces import MachineController, MachineRepository, RecordCache
from machine_reservation.core.value_objects import MachineRecord
from machine_reservation.domain.machine_lifecycle import (
    MachineEvent,
    first_reservable,
    is_startable,
    next_status,
)
from machine_reservation.loggers import logger


class MachineService:
    """
    Application service for machine workflows.

    Failures come back as WorkflowResult values; nothing here raises to
    the caller.
    """

    def __init__(
        self,
        store: MachineRepository,
        cache: RecordCache[MachineRecord],
        controller: MachineController,
    ) -> None:
        """
        Initialize the machine service.

        Args:
            store: Authoritative machine store.
            cache: Read cache keyed by machine id.
            controller: Client for the physical machines.
        """
        self._store = store
        self._cache = cache
        self._controller = controller

    def reserve(self, location_id: str, job_id: str) -> WorkflowResult:
        """
        Reserve the first available machine at a location for a job.

        Args:
            location_id: Location to reserve at.
            job_id: Job the machine is reserved for.

        Returns:
            200 with the reserved machine, or 404 if none is available.
        """
        machine = first_reservable(self._store.list_at_location(location_id))
        if machine is None:
            logger.warning(f"No available machine at {location_id} for job {job_id}")
            return WorkflowResult.not_found(f"No available machine at {location_id}")

        self._store.set_status(
            machine.machine_id,
            next_status(machine.status, MachineEvent.RESERVE),
        )
        self._store.set_job_id(machine.machine_id, job_id)

        logger.info(f"Machine {machine.machine_id} reserved for job {job_id}")
        return WorkflowResult.ok(self._refresh(machine.machine_id))

    def inspect(self, machine_id: str) -> WorkflowResult:
        """
        Get a machine, from the cache when possible.

        Args:
            machine_id: Machine to inspect.

        Returns:
            200 with the machine, or 404 if it does not exist.
        """
        cached = self._cache.get(machine_id)
        if cached is not None:
            return WorkflowResult.ok(cached)

        machine = self._store.get(machine_id)
        if machine is None:
            logger.warning(f"Machine not found: {machine_id}")
            return WorkflowResult.not_found(f"Machine not found: {machine_id}")

        self._cache.put(machine_id, machine)
        return WorkflowResult.ok(machine)

    def start(self, machine_id: str) -> WorkflowResult:
        """
        Start the cycle of a reserved machine.

        Args:
            machine_id: Machine to start.

        Returns:
            200 with the running machine, 404 if it does not exist, 400 with
            the unchanged machine if it is not awaiting drop-off, or 420 with
            the machine in ERROR if the hardware failed to start.
        """
        machine = self._store.get(machine_id)
        if machine is None:
            logger.warning(f"Machine not found: {machine_id}")
            return WorkflowResult.not_found(f"Machine not found: {machine_id}")

        if not is_startable(machine):
            logger.warning(f"Machine {machine_id} cannot start from {machine.status.value}")
            return WorkflowResult.bad_request(
                f"Machine {machine_id} is {machine.status.value}",
                machine=machine,
            )

        try:
            self._controller.start_cycle(machine_id)
        except HardwareFault as e:
            logger.error(f"Hardware fault starting {machine_id}: {e.message}")
            self._store.set_status(
                machine_id,
                next_status(machine.status, MachineEvent.START_FAILED),
            )
            return WorkflowResult.hardware_error(self._refresh(machine_id), e.message)

        self._store.set_status(
            machine_id,
            next_status(machine.status, MachineEvent.START_SUCCEEDED),
        )
        logger.info(f"Machine {machine_id} started for job {machine.current_job_id}")
        return WorkflowResult.ok(self._refresh(machine_id))

    def _refresh(self, machine_id: str) -> MachineRecord:
        """Re-read a machine from the store and write it through to the cache."""
        machine = self._store.get(machine_id)
        self._cache.put(machine_id, machine)
        return machine
