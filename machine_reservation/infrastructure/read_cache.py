"""
Read Cache - Bounded in-memory cache in front of the machine store.

Eviction is first-in, first-out by insertion order. Reads do not
refresh an entry, so this is not an LRU.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from machine_reservation.configs import DEFAULT_CACHE_CAPACITY
from machine_reservation.core.interfaces import CostRecorder
from machine_reservation.loggers import logger
from machine_reservation.simulation.accountant import ResourceConsumer
from machine_reservation.simulation.units import CACHE_READ, CACHE_WRITE, CONNECTION


T = TypeVar("T")


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of cache counters."""

    hits: int = 0
    misses: int = 0
    size: int = 0
    capacity: int = 0

    @property
    def lookups(self) -> int:
        """Get the total number of lookups."""
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Get the fraction of lookups that hit (0 when there were none)."""
        return self.hits / self.lookups if self.lookups else 0.0


class ReadCache(ResourceConsumer, Generic[T]):
    """
    String-keyed FIFO cache.

    A hit is free; a miss is charged a cache read. Every put is charged
    a cache write, overwrites included.
    """

    def __init__(
        self,
        accountant: CostRecorder,
        capacity: int = DEFAULT_CACHE_CAPACITY,
        consumer_name: Optional[str] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            accountant: Recorder the costs are charged to.
            capacity: Maximum number of entries.
            consumer_name: Name to attribute costs to.

        Raises:
            ValueError: If capacity is not positive.
        """
        if capacity <= 0:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")

        super().__init__(accountant, consumer_name)
        self._capacity = capacity
        self._entries: OrderedDict[str, T] = OrderedDict()
        self.hits = 0
        self.misses = 0
        self._consume(CONNECTION)

    @property
    def capacity(self) -> int:
        """Get the maximum number of entries."""
        return self._capacity

    def get(self, key: str) -> Optional[T]:
        """
        Get a cached value.

        Args:
            key: Cache key.

        Returns:
            The cached value, or None on a miss.
        """
        if key in self._entries:
            self.hits += 1
            return self._entries[key]

        self.misses += 1
        self._consume(CACHE_READ)
        return None

    def put(self, key: str, value: T) -> None:
        """
        Insert or overwrite a value, evicting the oldest entry if full.

        Overwriting keeps the key's original insertion position.

        Args:
            key: Cache key.
            value: Value to store.
        """
        if key not in self._entries and len(self._entries) >= self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache full, evicted {evicted}")

        self._entries[key] = value
        self._consume(CACHE_WRITE)

    def keys(self) -> list[str]:
        """Get cached keys, oldest first."""
        return list(self._entries)

    def stats(self) -> CacheStats:
        """Get a snapshot of the cache counters."""
        return CacheStats(
            hits=self.hits,
            misses=self.misses,
            size=len(self._entries),
            capacity=self._capacity,
        )

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
