"""
Application settings.

Provides typed configuration sections with environment variable overrides.
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from machine_reservation import configs


# =============================================================================
# Configuration Classes
# =============================================================================


@dataclass(frozen=True)
class CacheSettings:
    """Read cache settings."""

    capacity: int = configs.DEFAULT_CACHE_CAPACITY


@dataclass(frozen=True)
class SimulationSettings:
    """Load simulation settings."""

    runs: int = configs.SIMULATION_RUNS
    iterations: int = configs.SIMULATION_ITERATIONS
    machines: int = configs.SIMULATION_MACHINES
    locations: int = configs.SIMULATION_LOCATIONS
    hardware_failure_rate: float = configs.SIMULATION_FAILURE_RATE
    reserve_share: float = configs.SIMULATION_RESERVE_SHARE
    start_share: float = configs.SIMULATION_START_SHARE
    token: str = configs.SIMULATION_TOKEN
    seed: Optional[int] = None

    @property
    def inspect_share(self) -> float:
        """Get the share of steps left for inspecting machines."""
        return max(0.0, 1.0 - self.reserve_share - self.start_share)


# =============================================================================
# Main Settings
# =============================================================================


@dataclass
class Settings:
    """
    Main application settings.

    Aggregates all configuration sections.
    """

    cache: CacheSettings = field(default_factory=CacheSettings)
    simulation: SimulationSettings = field(default_factory=SimulationSettings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from defaults and environment overrides.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Settings instance.

        Raises:
            ValueError: If the cache capacity override is not a positive integer.
        """
        env = os.environ if environ is None else environ

        capacity = int(env.get(configs.ENV_CACHE_CAPACITY, configs.DEFAULT_CACHE_CAPACITY))
        if capacity <= 0:
            raise ValueError(f"Cache capacity must be positive, got {capacity}")

        return cls(cache=CacheSettings(capacity=capacity))


# =============================================================================
# Settings Singleton
# =============================================================================


_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns:
        Settings instance.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
