"""
Simulated cost, in arbitrary units, of the operations the service performs.

Used to attribute load to each component during capacity analysis.
"""

from typing import Final


CACHE_READ: Final[float] = 4
CACHE_WRITE: Final[float] = 6
DATABASE_READ: Final[float] = 2 * CACHE_READ
# Job bookkeeping, no durability guarantee
DATABASE_LAZY_WRITE: Final[float] = 2 * CACHE_WRITE
# Status changes, durable
DATABASE_WRITE: Final[float] = 2.5 * CACHE_WRITE
INTERNAL_API_CALL: Final[float] = 64
EXTERNAL_API_CALL: Final[float] = 2 * INTERNAL_API_CALL
CONNECTION: Final[float] = 256
