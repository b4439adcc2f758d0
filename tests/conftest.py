"""
Pytest configuration for machine reservation tests.

Adds the project root to sys.path so the package imports without an
install, and provides shared component fixtures.
"""

import sys
from pathlib import Path

import pytest


# Add the project root to sys.path for proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


from machine_reservation.core.value_objects import MachineRecord, MachineStatus  # noqa: E402
from machine_reservation.infrastructure.identity_provider import IdentityProviderClient  # noqa: E402
from machine_reservation.infrastructure.machine_control import MachineControlClient  # noqa: E402
from machine_reservation.infrastructure.machine_store import MachineStore  # noqa: E402
from machine_reservation.infrastructure.read_cache import ReadCache  # noqa: E402
from machine_reservation.simulation.accountant import CostAccountant  # noqa: E402


VALID_TOKEN = "valid-token"
INVALID_TOKEN = "invalid-token"


@pytest.fixture
def accountant():
    """Create a fresh cost accountant for each test."""
    return CostAccountant()


@pytest.fixture
def available_machine():
    """An available machine at location-a."""
    return MachineRecord(
        machine_id="machine-1",
        location_id="location-a",
        current_job_id=None,
        status=MachineStatus.AVAILABLE,
    )


@pytest.fixture
def cache(accountant):
    """Create a read cache with the default capacity."""
    return ReadCache(accountant)


@pytest.fixture
def store(accountant, available_machine):
    """Create a store holding one available machine."""
    return MachineStore(accountant, [available_machine])


@pytest.fixture
def identity_provider(accountant):
    """Create an identity provider accepting VALID_TOKEN."""
    return IdentityProviderClient(accountant, {VALID_TOKEN: "user-1"})


@pytest.fixture
def controller(accountant):
    """Create a machine controller that never fails."""
    return MachineControlClient(accountant)
