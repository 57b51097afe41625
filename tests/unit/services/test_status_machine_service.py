"""
Unit tests for StatusMachine.
"""

from datetime import timedelta
from itertools import product

import pytest

from workforce_engine.application.services.status_machine import StatusMachine
from workforce_engine.domain.exceptions.job_error import InvalidTransitionError
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_status import JobStatus

from tests.conftest import NOW


def job_in(make_job, status, **overrides):
    if status != JobStatus.PENDING and status != JobStatus.CANCELLED:
        overrides.setdefault("assigned_technician_id", "tech-1")
    return make_job(status=status, **overrides)


class TestStatusMachine:
    """Test cases for StatusMachine."""

    @pytest.fixture
    def machine(self, clock):
        return StatusMachine(clock)

    def test_illegal_pairs_fail(self, machine, make_job):
        for current, requested in product(JobStatus, JobStatus):
            if current.can_transition_to(requested):
                continue
            with pytest.raises(InvalidTransitionError):
                machine.transition(job_in(make_job, current), requested)

    @pytest.mark.parametrize("terminal", [JobStatus.COMPLETED, JobStatus.CANCELLED])
    def test_terminal_states_reject_everything(self, machine, make_job, terminal):
        overrides = {}
        if terminal == JobStatus.COMPLETED:
            overrides["completed_at"] = NOW
        job = job_in(make_job, terminal, **overrides)
        for requested in JobStatus:
            with pytest.raises(InvalidTransitionError):
                machine.transition(job, requested)

    def test_self_transition_rejected(self, machine, make_job):
        with pytest.raises(InvalidTransitionError) as exc_info:
            machine.transition(job_in(make_job, JobStatus.ASSIGNED), JobStatus.ASSIGNED)
        assert str(exc_info.value) == "Invalid status transition from assigned to assigned"

    def test_unknown_status_rejected(self, machine, make_job):
        with pytest.raises(InvalidTransitionError):
            machine.transition(make_job(), "archived")

    def test_accepts_string_status(self, machine, make_job):
        changes = machine.transition(make_job(), "cancelled")
        assert changes["status"] == JobStatus.CANCELLED

    def test_entering_in_progress_stamps_started_at(self, machine, make_job):
        changes = machine.transition(job_in(make_job, JobStatus.ASSIGNED), JobStatus.IN_PROGRESS)
        assert changes == {"status": JobStatus.IN_PROGRESS, "started_at": NOW}

    def test_started_at_not_overwritten(self, machine, make_job):
        earlier = NOW - timedelta(hours=2)
        job = job_in(make_job, JobStatus.ON_HOLD, started_at=earlier)
        changes = machine.transition(job, JobStatus.IN_PROGRESS)
        assert "started_at" not in changes

    def test_entering_completed_stamps_completed_at(self, machine, make_job, clock):
        clock.advance(hours=1)
        job = job_in(make_job, JobStatus.IN_PROGRESS, started_at=NOW)
        changes = machine.transition(job, JobStatus.COMPLETED, {"actual_duration": 60})
        assert changes == {
            "status": JobStatus.COMPLETED,
            "completed_at": NOW + timedelta(hours=1),
        }

    def test_completion_must_validate(self, machine, make_job):
        job = job_in(make_job, JobStatus.IN_PROGRESS, started_at=NOW)
        with pytest.raises(ValidationError) as exc_info:
            machine.transition(job, JobStatus.COMPLETED, {"photos": ["p"] * 11})
        assert exc_info.value.errors == ["Maximum 10 photos allowed per job"]

    def test_does_not_modify_job(self, machine, make_job):
        job = make_job()
        machine.transition(job, JobStatus.CANCELLED)
        assert job.status == JobStatus.PENDING
