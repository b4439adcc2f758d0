"""
Load Simulation - Drives the workflow engine with a random request mix.

Each iteration builds a fresh set of components, seeds the store with
available machines spread over a few locations and fires a sequence of
reserve, start and inspect requests. The report attributes simulated cost
to each component and compares cache hits with store accesses.
"""

from __future__ import annotations

import random
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Any, Optional

from machine_reservation.application.models import HttpMethod, Request
from machine_reservation.application.workflow_engine import WorkflowEngine
from machine_reservation.configs import DEFAULT_CACHE_CAPACITY
from machine_reservation.core.value_objects import MachineRecord, MachineStatus
from machine_reservation.infrastructure.identity_provider import IdentityProviderClient
from machine_reservation.infrastructure.machine_control import MachineControlClient
from machine_reservation.infrastructure.machine_store import MachineStore
from machine_reservation.infrastructure.read_cache import ReadCache
from machine_reservation.infrastructure.settings import SimulationSettings
from machine_reservation.loggers import logger
from machine_reservation.simulation.accountant import CostAccountant


# =============================================================================
# Results
# =============================================================================


@dataclass
class IterationResult:
    """
    Counters collected from one simulation iteration.

    Attributes:
        usage: Units consumed per component.
        total_units: Units consumed overall.
        cache_hits: Cache lookups that hit.
        cache_misses: Cache lookups that missed.
        store_accesses: Reads and writes against the machine store.
        status_codes: Number of responses per status code.
    """

    usage: dict[str, float]
    total_units: float
    cache_hits: int
    cache_misses: int
    store_accesses: int
    status_codes: dict[int, int] = field(default_factory=dict)

    @property
    def hit_rate(self) -> float:
        """Get the fraction of cache lookups that hit."""
        lookups = self.cache_hits + self.cache_misses
        return self.cache_hits / lookups if lookups else 0.0

    @property
    def hit_to_access_ratio(self) -> float:
        """Get cache hits per store access."""
        return self.cache_hits / self.store_accesses if self.store_accesses else 0.0

    def share_of(self, consumer: str) -> float:
        """Get a component's fraction of the total units."""
        return self.usage.get(consumer, 0) / self.total_units if self.total_units else 0.0


def format_table(rows: list[dict[str, Any]]) -> str:
    """
    Render rows as a plain text table.

    Args:
        rows: Rows sharing the same keys; the first row's keys are the columns.

    Returns:
        The table, or an empty string for no rows.
    """
    if not rows:
        return ""

    columns = list(rows[0])
    cells = [[str(row.get(column, "")) for column in columns] for row in rows]
    widths = [
        max(len(column), *(len(line[i]) for line in cells))
        for i, column in enumerate(columns)
    ]

    def render(values: list[str]) -> str:
        return " | ".join(value.ljust(width) for value, width in zip(values, widths))

    separator = "-+-".join("-" * width for width in widths)
    return "\n".join([render(columns), separator, *(render(line) for line in cells)])


@dataclass
class SimulationReport:
    """Results of all iterations of a simulation."""

    iterations: list[IterationResult] = field(default_factory=list)

    def consumers(self) -> list[str]:
        """Get every component that consumed units, in first-seen order."""
        seen: dict[str, None] = {}
        for result in self.iterations:
            for consumer in result.usage:
                seen.setdefault(consumer)
        return list(seen)

    def unit_rows(self) -> list[dict[str, Any]]:
        """Get units and share of total per component and run."""
        rows = []
        for consumer in self.consumers():
            row: dict[str, Any] = {"Resource": consumer}
            for i, result in enumerate(self.iterations, start=1):
                row[f"Run {i} Units"] = result.usage.get(consumer, 0)
                row[f"Run {i} %"] = f"{result.share_of(consumer) * 100:.2f}%"
            rows.append(row)
        return rows

    def cache_rows(self) -> list[dict[str, Any]]:
        """Get cache hits, misses and hit rate per run."""
        return [
            {
                "Run": i,
                "Cache Hits": result.cache_hits,
                "Cache Misses": result.cache_misses,
                "Hit Rate": f"{result.hit_rate * 100:.2f}%",
            }
            for i, result in enumerate(self.iterations, start=1)
        ]

    def ratio_rows(self) -> list[dict[str, Any]]:
        """Get cache hits against store accesses per run."""
        return [
            {
                "Run": i,
                "Cache Hits": result.cache_hits,
                "DB Accesses": result.store_accesses,
                "Hit/Access Ratio": f"{result.hit_to_access_ratio:.4f}",
            }
            for i, result in enumerate(self.iterations, start=1)
        ]

    def render(self) -> str:
        """Render all three tables."""
        return "\n\n".join(
            format_table(rows)
            for rows in (self.unit_rows(), self.cache_rows(), self.ratio_rows())
        )


# =============================================================================
# Simulation
# =============================================================================


class LoadSimulation:
    """
    Sequential load simulation of the workflow engine.

    Reserved machines are started in the order they were reserved.
    """

    def __init__(
        self,
        settings: Optional[SimulationSettings] = None,
        cache_capacity: int = DEFAULT_CACHE_CAPACITY,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            settings: Simulation parameters.
            cache_capacity: Capacity of the read cache.
            rng: Random source; seeded from settings when omitted.

        Raises:
            ValueError: If the parameters cannot produce a simulation.
        """
        self._settings = settings or SimulationSettings()
        if self._settings.machines <= 0 or self._settings.locations <= 0:
            raise ValueError("Simulation needs at least one machine and one location")
        if self._settings.reserve_share + self._settings.start_share > 1.0:
            raise ValueError("Reserve and start shares cannot exceed 1")

        self._cache_capacity = cache_capacity
        self._rng = rng or random.Random(self._settings.seed)
        self.machine_ids = [f"sim-machine-{i}" for i in range(self._settings.machines)]
        self.location_ids = [f"sim-location-{i}" for i in range(self._settings.locations)]

    @property
    def settings(self) -> SimulationSettings:
        """Get the simulation parameters."""
        return self._settings

    def seed_machines(self) -> list[MachineRecord]:
        """Create available machines spread round-robin over the locations."""
        return [
            MachineRecord(
                machine_id=machine_id,
                location_id=self.location_ids[i % len(self.location_ids)],
                current_job_id=None,
                status=MachineStatus.AVAILABLE,
            )
            for i, machine_id in enumerate(self.machine_ids)
        ]

    def run(self) -> SimulationReport:
        """
        Run every iteration.

        Returns:
            Report covering all iterations.
        """
        report = SimulationReport()
        for iteration in range(1, self._settings.iterations + 1):
            logger.info(f"Simulation iteration {iteration}/{self._settings.iterations}")
            report.iterations.append(self.run_iteration())
        return report

    def run_iteration(self) -> IterationResult:
        """
        Run one iteration against fresh components.

        Returns:
            Counters collected during the iteration.
        """
        settings = self._settings
        accountant = CostAccountant()
        cache: ReadCache[MachineRecord] = ReadCache(accountant, capacity=self._cache_capacity)
        store = MachineStore(accountant, self.seed_machines())
        identity = IdentityProviderClient(accountant, {settings.token: "sim-user"})
        controller = MachineControlClient(
            accountant,
            failure_rate=settings.hardware_failure_rate,
            rng=self._rng,
        )
        engine = WorkflowEngine(identity, store, cache, controller)

        reserved: deque[MachineRecord] = deque()
        status_codes: Counter[int] = Counter()

        for step in range(settings.runs):
            action = self._rng.random()
            if action < settings.reserve_share:
                request = Request(
                    method=HttpMethod.POST,
                    path="/machine/request",
                    token=settings.token,
                    location_id=self._rng.choice(self.location_ids),
                    job_id=f"sim-job-{step}",
                )
                response = engine.handle(request)
                if response.machine is not None:
                    reserved.append(response.machine)
            elif action < settings.reserve_share + settings.start_share and reserved:
                machine = reserved.popleft()
                response = engine.handle(
                    Request(
                        method=HttpMethod.POST,
                        path=f"/machine/{machine.machine_id}/start",
                        token=settings.token,
                    )
                )
            else:
                response = engine.handle(
                    Request(
                        method=HttpMethod.GET,
                        path=f"/machine/{self._rng.choice(self.machine_ids)}",
                        token=settings.token,
                    )
                )
            status_codes[int(response.status_code)] += 1

        return IterationResult(
            usage=accountant.usage_by_consumer(),
            total_units=accountant.total_units(),
            cache_hits=cache.hits,
            cache_misses=cache.misses,
            store_accesses=store.access_count,
            status_codes=dict(status_codes),
        )
