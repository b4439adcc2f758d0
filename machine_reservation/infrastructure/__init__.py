"""
Infrastructure layer - External dependencies and implementations.

Contains:
- Machine store and read cache
- Identity provider and machine control clients
- Configuration
"""

from .read_cache import ReadCache, CacheStats
from .machine_store import MachineStore
from .identity_provider import IdentityProviderClient
from .machine_control import MachineControlClient
from .settings import (
    Settings,
    get_settings,
    reset_settings,
)


__all__ = [
    # Storage
    "ReadCache",
    "CacheStats",
    "MachineStore",
    # External clients
    "IdentityProviderClient",
    "MachineControlClient",
    # Settings
    "Settings",
    "get_settings",
    "reset_settings",
]
