"""
Unit tests for UpdateJobUseCase.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from workforce_engine.application.use_cases.update_job import JobUpdate, UpdateJobUseCase
from workforce_engine.domain.exceptions.job_error import (
    InvalidStateError,
    InvalidTransitionError,
    NotFoundError,
)
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.infrastructure.repositories.job_repository import JobRepository

from tests.conftest import NOW


class TestUpdateJobUseCase:
    """Test cases for UpdateJobUseCase."""

    @pytest.fixture
    def repo(self, store):
        return JobRepository(store)

    @pytest.fixture
    def use_case(self, repo, clock):
        return UpdateJobUseCase(repo, clock=clock)

    @pytest.fixture
    def save(self, repo, make_job):
        """Persist a job in the given status."""

        async def _save(job_id, status=JobStatus.PENDING, **overrides):
            if status not in (JobStatus.PENDING, JobStatus.CANCELLED):
                overrides.setdefault("assigned_technician_id", "tech-1")
            return await repo.create(make_job(id=job_id, status=status, **overrides))

        return _save

    @pytest.mark.asyncio
    async def test_start_job(self, use_case, save, clock):
        await save("job-1", JobStatus.ASSIGNED)
        clock.advance(minutes=30)

        job = await use_case.execute("job-1", JobUpdate(status=JobStatus.IN_PROGRESS))

        assert job.status == JobStatus.IN_PROGRESS
        assert job.started_at == NOW + timedelta(minutes=30)
        assert job.updated_at == NOW + timedelta(minutes=30)
        assert job.created_at == NOW

    @pytest.mark.asyncio
    async def test_complete_job_with_details(self, use_case, save, clock):
        await save("job-1", JobStatus.IN_PROGRESS, started_at=NOW)
        clock.advance(hours=2)

        job = await use_case.execute(
            "job-1",
            JobUpdate(
                status=JobStatus.COMPLETED,
                actual_duration=115,
                completion_notes="Replaced the <capacitor>",
                work_summary="Unit cooling again",
                customer_signature="data:image/png;base64,AAAA",
                photos=["before.jpg", "after.jpg"],
            ),
        )

        assert job.status == JobStatus.COMPLETED
        assert job.completed_at == NOW + timedelta(hours=2)
        assert job.actual_duration == 115
        assert job.completion_notes == "Replaced the capacitor"
        assert job.photos == ["before.jpg", "after.jpg"]

    @pytest.mark.asyncio
    async def test_start_stamp_wins_over_supplied_started_at(self, use_case, save, clock):
        await save("job-1", JobStatus.ASSIGNED)
        clock.advance(minutes=30)

        job = await use_case.execute(
            "job-1",
            JobUpdate(status=JobStatus.IN_PROGRESS, started_at=NOW - timedelta(hours=1)),
        )

        assert job.started_at == NOW + timedelta(minutes=30)

    @pytest.mark.asyncio
    async def test_completion_stamp_wins_over_supplied_completed_at(self, use_case, save, clock):
        await save("job-1", JobStatus.IN_PROGRESS, started_at=NOW)
        clock.advance(hours=2)

        job = await use_case.execute(
            "job-1",
            JobUpdate(status=JobStatus.COMPLETED, completed_at=NOW + timedelta(hours=5)),
        )

        assert job.completed_at == NOW + timedelta(hours=2)

    @pytest.mark.asyncio
    async def test_supplied_started_at_kept_without_transition(self, use_case, save, clock):
        await save("job-1", JobStatus.IN_PROGRESS, started_at=NOW)
        clock.advance(hours=1)

        job = await use_case.execute(
            "job-1", JobUpdate(started_at=NOW - timedelta(minutes=15))
        )

        assert job.status == JobStatus.IN_PROGRESS
        assert job.started_at == NOW - timedelta(minutes=15)

    @pytest.mark.asyncio
    async def test_actual_duration_requires_completion(self, use_case, save, repo):
        await save("job-1", JobStatus.IN_PROGRESS, started_at=NOW)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute("job-1", JobUpdate(actual_duration=45))

        assert exc_info.value.errors == [
            "Actual duration can only be set once the job is completed"
        ]
        assert (await repo.get_by_id("job-1")).actual_duration is None

    @pytest.mark.asyncio
    async def test_completion_fields_validated_without_status_change(self, use_case, save):
        await save("job-1", JobStatus.IN_PROGRESS, started_at=NOW)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute("job-1", JobUpdate(photos=[f"{i}.jpg" for i in range(11)]))

        assert exc_info.value.errors == ["Maximum 10 photos allowed per job"]

    @pytest.mark.asyncio
    async def test_invalid_transition(self, use_case, save, repo):
        await save("job-1", JobStatus.CANCELLED)

        with pytest.raises(InvalidTransitionError):
            await use_case.execute("job-1", JobUpdate(status=JobStatus.PENDING))

        assert (await repo.get_by_id("job-1")).status == JobStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_job_not_found(self, use_case):
        with pytest.raises(NotFoundError) as exc_info:
            await use_case.execute("missing", JobUpdate(note="hello"))
        assert exc_info.value.entity_id == "missing"

    @pytest.mark.asyncio
    async def test_pending_to_assigned_needs_assignment(self, use_case, save):
        await save("job-1")

        with pytest.raises(InvalidStateError):
            await use_case.execute("job-1", JobUpdate(status=JobStatus.ASSIGNED))

    @pytest.mark.asyncio
    async def test_on_hold_back_to_assigned(self, use_case, save):
        await save("job-1", JobStatus.ON_HOLD)

        job = await use_case.execute("job-1", JobUpdate(status=JobStatus.ASSIGNED))

        assert job.status == JobStatus.ASSIGNED
        assert job.assigned_technician_id == "tech-1"

    @pytest.mark.asyncio
    async def test_notes_are_appended(self, use_case, save):
        await save("job-1", JobStatus.ASSIGNED, notes=["first"])

        await use_case.execute("job-1", JobUpdate(note="  <second>  "))
        job = await use_case.execute("job-1", JobUpdate(internal_note="check parts"))

        assert job.notes == ["first", "second"]
        assert job.internal_notes == ["check parts"]

    @pytest.mark.asyncio
    async def test_concurrent_status_change(self, use_case, save, repo, store):
        stale = await save("job-1", JobStatus.ASSIGNED)
        await store.update(repo.collection, "job-1", {"status": "cancelled"})
        repo.get_by_id = AsyncMock(return_value=stale)

        with pytest.raises(InvalidStateError):
            await use_case.execute("job-1", JobUpdate(status=JobStatus.IN_PROGRESS))

        assert (await store.get(repo.collection, "job-1"))["status"] == "cancelled"


class TestBulkUpdate:
    """Test cases for UpdateJobUseCase.execute_bulk."""

    @pytest.fixture
    def repo(self, store):
        return JobRepository(store)

    @pytest.fixture
    def use_case(self, repo, clock):
        return UpdateJobUseCase(repo, clock=clock)

    @pytest.mark.asyncio
    async def test_applies_all_updates(self, use_case, repo, make_job):
        await repo.create(make_job(id="a"))
        await repo.create(make_job(id="b", status=JobStatus.ASSIGNED, assigned_technician_id="t"))

        jobs = await use_case.execute_bulk(
            [
                ("a", JobUpdate(status=JobStatus.CANCELLED)),
                ("b", JobUpdate(status=JobStatus.IN_PROGRESS, note="on my way")),
            ]
        )

        assert [job.status for job in jobs] == [JobStatus.CANCELLED, JobStatus.IN_PROGRESS]
        assert jobs[1].notes == ["on my way"]

    @pytest.mark.asyncio
    async def test_reports_every_problem_and_writes_nothing(self, use_case, repo, make_job):
        await repo.create(make_job(id="a"))
        await repo.create(make_job(id="b", status=JobStatus.CANCELLED))
        await repo.create(make_job(id="c"))

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute_bulk(
                [
                    ("a", JobUpdate(status=JobStatus.CANCELLED)),
                    ("b", JobUpdate(status=JobStatus.PENDING)),
                    ("c", JobUpdate(photos=["p"] * 11)),
                    ("missing", JobUpdate(note="x")),
                ]
            )

        assert exc_info.value.errors == [
            "Job b: Invalid status transition from cancelled to pending",
            "Job c: Maximum 10 photos allowed per job",
            "Job missing: Job missing not found",
        ]
        assert (await repo.get_by_id("a")).status == JobStatus.PENDING

    @pytest.mark.asyncio
    async def test_rejects_duplicate_ids(self, use_case, repo, make_job):
        await repo.create(make_job(id="a"))

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute_bulk(
                [("a", JobUpdate(note="one")), ("a", JobUpdate(note="two"))]
            )

        assert exc_info.value.errors == ["Job a: appears 2 times in the batch"]
        assert (await repo.get_by_id("a")).notes == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, use_case):
        assert await use_case.execute_bulk([]) == []
