"""
Unit tests for the identity provider and machine control clients.
"""

import random

import pytest

from machine_reservation.core.exceptions import HardwareFault
from machine_reservation.core.interfaces import IdentityProvider, MachineController
from machine_reservation.core.value_objects import MachineStatus
from machine_reservation.infrastructure.identity_provider import IdentityProviderClient
from machine_reservation.infrastructure.machine_control import MachineControlClient
from machine_reservation.simulation.units import CONNECTION, EXTERNAL_API_CALL, INTERNAL_API_CALL


# =============================================================================
# Identity Provider Tests
# =============================================================================


class TestIdentityProviderClient:
    """Tests for IdentityProviderClient."""

    def test_satisfies_protocol(self, identity_provider):
        """Test the client implements the IdentityProvider protocol."""
        assert isinstance(identity_provider, IdentityProvider)

    def test_validate_token(self, identity_provider):
        """Test known tokens validate and unknown ones do not."""
        assert identity_provider.validate_token("valid-token") is True
        assert identity_provider.validate_token("invalid-token") is False

    def test_rejects_everything_without_tokens(self, accountant):
        """Test a client with no configured tokens rejects all tokens."""
        client = IdentityProviderClient(accountant)
        assert client.validate_token("anything") is False

    def test_identify(self, identity_provider):
        """Test user identification by token."""
        assert identity_provider.identify("valid-token") == "user-1"
        assert identity_provider.identify("invalid-token") == ""

    def test_calls_are_charged_as_external(self, accountant):
        """Test every call is charged an external API call."""
        client = IdentityProviderClient(accountant, {"t": "u"})
        client.validate_token("t")
        client.identify("t")

        assert accountant.usage_by_consumer() == {
            "IdentityProviderClient": CONNECTION + 2 * EXTERNAL_API_CALL
        }


# =============================================================================
# Machine Control Tests
# =============================================================================


class TestMachineControlClient:
    """Tests for MachineControlClient."""

    def test_satisfies_protocol(self, controller):
        """Test the client implements the MachineController protocol."""
        assert isinstance(controller, MachineController)

    def test_start_cycle(self, controller):
        """Test a successful start is remembered as RUNNING."""
        controller.start_cycle("m1")
        assert controller.status("m1") == MachineStatus.RUNNING

    def test_unknown_machine_reports_error(self, controller):
        """Test a machine never commanded reports ERROR."""
        assert controller.status("never-seen") == MachineStatus.ERROR

    def test_faulty_machine(self, accountant):
        """Test starting a faulty machine raises HardwareFault."""
        client = MachineControlClient(accountant, faulty_machines=["m1"])

        with pytest.raises(HardwareFault) as exc_info:
            client.start_cycle("m1")

        assert exc_info.value.machine_id == "m1"
        assert client.status("m1") == MachineStatus.ERROR

    def test_mark_faulty(self, controller):
        """Test a machine marked faulty fails from then on."""
        controller.start_cycle("m1")
        controller.mark_faulty("m1")

        with pytest.raises(HardwareFault):
            controller.start_cycle("m1")

    def test_failure_rate_one_always_fails(self, accountant):
        """Test a failure rate of 1 fails every start."""
        client = MachineControlClient(accountant, failure_rate=1.0, rng=random.Random(1))

        for machine_id in ("m1", "m2", "m3"):
            with pytest.raises(HardwareFault):
                client.start_cycle(machine_id)

    def test_failure_rate_zero_never_fails(self, accountant):
        """Test a failure rate of 0 never fails."""
        client = MachineControlClient(accountant, failure_rate=0.0)

        for i in range(50):
            client.start_cycle(f"m{i}")

    @pytest.mark.parametrize("rate", [-0.1, 1.5])
    def test_invalid_failure_rate(self, accountant, rate):
        """Test failure rates outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            MachineControlClient(accountant, failure_rate=rate)

    def test_force_stop(self, controller):
        """Test a forced stop leaves the machine in ERROR."""
        controller.start_cycle("m1")
        controller.force_stop("m1")

        assert controller.status("m1") == MachineStatus.ERROR

    def test_calls_are_charged_as_internal(self, accountant):
        """Test every call is charged an internal API call, failures included."""
        client = MachineControlClient(accountant, faulty_machines=["bad"])
        client.status("m1")
        client.start_cycle("m1")
        client.force_stop("m1")
        with pytest.raises(HardwareFault):
            client.start_cycle("bad")

        assert accountant.usage_by_consumer() == {
            "MachineControlClient": CONNECTION + 4 * INTERNAL_API_CALL
        }
