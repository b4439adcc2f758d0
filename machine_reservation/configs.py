"""
Configuration module for the machine reservation service.

This module provides centralized defaults for logging, caching and the
load simulation, plus the environment variables that override them.
"""

import os
from typing import Final, Optional


# =============================================================================
# Environment Variables
# =============================================================================

ENV_LOG_LEVEL: Final[str] = "MACHINE_RESERVATION_LOG_LEVEL"
ENV_LOG_FILE: Final[str] = "MACHINE_RESERVATION_LOG_FILE"
ENV_LOKI_URL: Final[str] = "MACHINE_RESERVATION_LOKI_URL"
ENV_CACHE_CAPACITY: Final[str] = "MACHINE_RESERVATION_CACHE_CAPACITY"


# =============================================================================
# Logging Configuration
# =============================================================================

APP_NAME: Final[str] = "machine_reservation"
LOGGER_NAME: Final[str] = "MACHINE_RESERVATION"

DEFAULT_LOG_LEVEL: Final[str] = "INFO"

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(value: Optional[str]) -> str:
    """Normalize a level name; unknown or empty names give the default level."""
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL


# Empty means "handler disabled"
LOG_LEVEL: Final[str] = resolve_log_level(os.environ.get(ENV_LOG_LEVEL))
LOG_FILE: Final[str] = os.environ.get(ENV_LOG_FILE, "")
LOKI_URL: Final[str] = os.environ.get(ENV_LOKI_URL, "")


# =============================================================================
# Cache Configuration
# =============================================================================

DEFAULT_CACHE_CAPACITY: Final[int] = 64


# =============================================================================
# Load Simulation Configuration
# =============================================================================

SIMULATION_RUNS: Final[int] = 10000
SIMULATION_ITERATIONS: Final[int] = 4
SIMULATION_MACHINES: Final[int] = 100
SIMULATION_LOCATIONS: Final[int] = 5
SIMULATION_FAILURE_RATE: Final[float] = 0.05
SIMULATION_RESERVE_SHARE: Final[float] = 0.4
SIMULATION_START_SHARE: Final[float] = 0.3
SIMULATION_TOKEN: Final[str] = "sim-token"
