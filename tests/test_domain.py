"""
Unit tests for machine value objects and lifecycle rules.
"""

import pytest

from machine_reservation.core.value_objects import MachineRecord, MachineStatus
from machine_reservation.domain.machine_lifecycle import (
    MachineEvent,
    TRANSITIONS,
    can_transition,
    first_reservable,
    is_reservable,
    is_startable,
    next_status,
)


# =============================================================================
# Value Objects Tests
# =============================================================================


class TestMachineRecord:
    """Tests for MachineRecord value object."""

    def test_defaults(self):
        """Test a new record is available with no job."""
        record = MachineRecord("m1", "loc-a")
        assert record.status == MachineStatus.AVAILABLE
        assert record.current_job_id is None
        assert record.is_available
        assert not record.holds_job

    def test_with_status_returns_copy(self):
        """Test with_status leaves the original untouched."""
        record = MachineRecord("m1", "loc-a")
        updated = record.with_status(MachineStatus.RUNNING)

        assert updated.status == MachineStatus.RUNNING
        assert record.status == MachineStatus.AVAILABLE

    def test_with_job_id_returns_copy(self):
        """Test with_job_id leaves the original untouched."""
        record = MachineRecord("m1", "loc-a")
        updated = record.with_job_id("job-1")

        assert updated.current_job_id == "job-1"
        assert record.current_job_id is None

    @pytest.mark.parametrize(
        "status, holds",
        [
            (MachineStatus.AVAILABLE, False),
            (MachineStatus.AWAITING_DROPOFF, True),
            (MachineStatus.RUNNING, True),
            (MachineStatus.AWAITING_PICKUP, True),
            (MachineStatus.ERROR, False),
        ],
    )
    def test_holds_job(self, status, holds):
        """Test which statuses may carry a job id."""
        assert MachineRecord("m1", "loc-a", status=status).holds_job is holds

    def test_to_dict(self):
        """Test conversion to the response dictionary."""
        record = MachineRecord("m1", "loc-a", "job-9", MachineStatus.AWAITING_DROPOFF)
        assert record.to_dict() == {
            "machineId": "m1",
            "locationId": "loc-a",
            "currentJobId": "job-9",
            "status": "AWAITING_DROPOFF",
        }

    def test_from_dict(self):
        """Test building a record from its dictionary form."""
        record = MachineRecord.from_dict(
            {"machineId": "m1", "locationId": "loc-a", "status": "RUNNING", "currentJobId": "j"}
        )
        assert record == MachineRecord("m1", "loc-a", "j", MachineStatus.RUNNING)

    def test_records_compare_by_value(self):
        """Test equal fields make equal records."""
        assert MachineRecord("m1", "a") == MachineRecord("m1", "a")
        assert MachineRecord("m1", "a") != MachineRecord("m1", "b")


# =============================================================================
# Lifecycle Tests
# =============================================================================


class TestMachineLifecycle:
    """Tests for the machine lifecycle transition table."""

    def test_legal_transitions(self):
        """Test the three legal transitions."""
        assert next_status(MachineStatus.AVAILABLE, MachineEvent.RESERVE) == MachineStatus.AWAITING_DROPOFF
        assert (
            next_status(MachineStatus.AWAITING_DROPOFF, MachineEvent.START_SUCCEEDED)
            == MachineStatus.RUNNING
        )
        assert (
            next_status(MachineStatus.AWAITING_DROPOFF, MachineEvent.START_FAILED)
            == MachineStatus.ERROR
        )
        assert len(TRANSITIONS) == 3

    @pytest.mark.parametrize(
        "status",
        [
            MachineStatus.AWAITING_DROPOFF,
            MachineStatus.RUNNING,
            MachineStatus.AWAITING_PICKUP,
            MachineStatus.ERROR,
        ],
    )
    def test_only_available_machines_are_reservable(self, status):
        """Test reserve is rejected from every non-available status."""
        assert not can_transition(status, MachineEvent.RESERVE)
        assert next_status(status, MachineEvent.RESERVE) is None

    @pytest.mark.parametrize(
        "status",
        [
            MachineStatus.AVAILABLE,
            MachineStatus.RUNNING,
            MachineStatus.AWAITING_PICKUP,
            MachineStatus.ERROR,
        ],
    )
    def test_only_awaiting_dropoff_is_startable(self, status):
        """Test start is rejected from every status but AWAITING_DROPOFF."""
        assert not is_startable(MachineRecord("m1", "a", status=status))

    def test_awaiting_pickup_is_never_produced(self):
        """Test no transition leads to AWAITING_PICKUP yet."""
        assert MachineStatus.AWAITING_PICKUP not in TRANSITIONS.values()

    def test_is_reservable(self):
        """Test reservability of records."""
        assert is_reservable(MachineRecord("m1", "a"))
        assert not is_reservable(MachineRecord("m1", "a", status=MachineStatus.ERROR))

    def test_first_reservable_is_first_match(self):
        """Test selection picks the first available machine in order."""
        machines = [
            MachineRecord("m1", "a", "j", MachineStatus.RUNNING),
            MachineRecord("m2", "a"),
            MachineRecord("m3", "a"),
        ]
        assert first_reservable(machines).machine_id == "m2"

    def test_first_reservable_none(self):
        """Test selection returns None when nothing is available."""
        assert first_reservable([]) is None
        assert first_reservable([MachineRecord("m1", "a", status=MachineStatus.ERROR)]) is None
