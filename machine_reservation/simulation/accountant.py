"""
Cost Accountant - Tracks simulated resource consumption per component.

One accountant is created per process (or per simulation run) and passed
to every component, which charges it through ``ResourceConsumer``.
"""

from __future__ import annotations

from typing import Optional

from machine_reservation.core.interfaces import CostRecorder


class CostAccountant:
    """
    Running totals of simulated cost.

    Keeps a grand total and a per-consumer breakdown. Pure counters:
    recording never fails.
    """

    def __init__(self) -> None:
        """Initialize empty counters."""
        self._total_units: float = 0
        self._usage: dict[str, float] = {}

    def record(self, consumer_name: str, units: float) -> None:
        """
        Charge units to a consumer.

        Args:
            consumer_name: Name the cost is attributed to.
            units: Number of units consumed.
        """
        self._total_units += units
        self._usage[consumer_name] = self._usage.get(consumer_name, 0) + units

    def total_units(self) -> float:
        """Get the total units consumed across all consumers."""
        return self._total_units

    def usage_by_consumer(self) -> dict[str, float]:
        """Get a snapshot of units consumed per consumer."""
        return dict(self._usage)

    def share_of(self, consumer_name: str) -> float:
        """Get a consumer's fraction of the total (0 when nothing was charged)."""
        if not self._total_units:
            return 0.0
        return self._usage.get(consumer_name, 0) / self._total_units

    def reset(self) -> None:
        """Clear all counters."""
        self._total_units = 0
        self._usage.clear()

    def __repr__(self) -> str:
        return f"CostAccountant(total_units={self._total_units}, consumers={len(self._usage)})"


class ResourceConsumer:
    """
    Base class for components that are charged simulated cost.

    The consumer name defaults to the concrete class name.
    """

    def __init__(
        self,
        accountant: CostRecorder,
        consumer_name: Optional[str] = None,
    ) -> None:
        """
        Initialize the consumer.

        Args:
            accountant: Recorder the costs are charged to.
            consumer_name: Name to attribute costs to.
        """
        self._accountant = accountant
        self._consumer_name = consumer_name or type(self).__name__

    @property
    def consumer_name(self) -> str:
        """Get the name costs are attributed to."""
        return self._consumer_name

    def _consume(self, units: float) -> None:
        """Charge units to this consumer."""
        self._accountant.record(self._consumer_name, units)
