"""
Machine Control client (stub).

Stands in for the hardware API of the smart machines. Start failures can
be injected, either for specific machines or at random with a given rate,
so load simulations can reproduce hardware faults.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from machine_reservation.core.exceptions import HardwareFault
from machine_reservation.core.interfaces import CostRecorder
from machine_reservation.core.value_objects import MachineStatus
from machine_reservation.loggers import logger
from machine_reservation.simulation.accountant import ResourceConsumer
from machine_reservation.simulation.units import CONNECTION, INTERNAL_API_CALL


class MachineControlClient(ResourceConsumer):
    """
    Client for start/stop commands sent to physical machines.

    Remembers the last status it commanded per machine. Machines it has
    never commanded report ERROR.
    """

    def __init__(
        self,
        accountant: CostRecorder,
        failure_rate: float = 0.0,
        faulty_machines: Iterable[str] = (),
        rng: Optional[random.Random] = None,
        consumer_name: Optional[str] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            accountant: Recorder the costs are charged to.
            failure_rate: Probability that a start fails, between 0 and 1.
            faulty_machines: Machines whose starts always fail.
            rng: Random source for failure injection.
            consumer_name: Name to attribute costs to.

        Raises:
            ValueError: If failure_rate is outside [0, 1].
        """
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError(f"Failure rate must be between 0 and 1, got {failure_rate}")

        super().__init__(accountant, consumer_name)
        self._failure_rate = failure_rate
        self._faulty_machines = set(faulty_machines)
        self._rng = rng or random.Random()
        self._commanded: dict[str, MachineStatus] = {}
        self._consume(CONNECTION)

    def mark_faulty(self, machine_id: str) -> None:
        """Make every future start of a machine fail."""
        self._faulty_machines.add(machine_id)

    def status(self, machine_id: str) -> MachineStatus:
        """
        Get the status reported by a machine.

        Args:
            machine_id: Machine to query.

        Returns:
            The last commanded status, or ERROR for unknown machines.
        """
        self._consume(INTERNAL_API_CALL)
        return self._commanded.get(machine_id, MachineStatus.ERROR)

    def start_cycle(self, machine_id: str) -> None:
        """
        Start a machine's cycle.

        Args:
            machine_id: Machine to start.

        Raises:
            HardwareFault: If the machine failed to start.
        """
        self._consume(INTERNAL_API_CALL)

        if machine_id in self._faulty_machines or self._should_fail():
            self._commanded[machine_id] = MachineStatus.ERROR
            raise HardwareFault(f"Machine {machine_id} failed to start", machine_id=machine_id)

        self._commanded[machine_id] = MachineStatus.RUNNING
        logger.debug(f"Start command accepted by {machine_id}")

    def force_stop(self, machine_id: str) -> None:
        """
        Forcibly stop a machine, leaving it in the error state.

        Args:
            machine_id: Machine to stop.
        """
        self._consume(INTERNAL_API_CALL)
        self._commanded[machine_id] = MachineStatus.ERROR
        logger.warning(f"Machine {machine_id} force-stopped")

    def _should_fail(self) -> bool:
        return self._failure_rate > 0 and self._rng.random() < self._failure_rate
