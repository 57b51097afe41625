"""Update job use case."""

import asyncio
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from workforce_engine.application.services.data_sanitizer import sanitize_string
from workforce_engine.application.services.job_validation import validate_job_completion
from workforce_engine.application.services.status_machine import StatusMachine
from workforce_engine.config.logging import get_logger
from workforce_engine.domain.clock import Clock, utc_now
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.exceptions.job_error import (
    InvalidStateError,
    JobError,
    NotFoundError,
)
from workforce_engine.domain.exceptions.store_error import TransactionConflictError
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.infrastructure.repositories.job_repository import JobRepository

logger = get_logger(__name__)

_COMPLETION_FIELDS = ("completion_notes", "work_summary", "actual_duration", "photos")
_PLAIN_FIELDS = ("started_at", "completed_at", "actual_duration", "photos", "customer_signature")


@dataclass
class JobUpdate:
    """Requested changes to a job. Fields left as None are not touched."""

    status: Optional[JobStatus] = None
    note: Optional[str] = None
    internal_note: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    actual_duration: Optional[int] = None
    completion_notes: Optional[str] = None
    customer_signature: Optional[str] = None
    photos: Optional[List[str]] = None
    work_summary: Optional[str] = None

    def completion_payload(self) -> Dict[str, Any]:
        """Completion fields present in this update."""
        return {
            name: getattr(self, name)
            for name in _COMPLETION_FIELDS
            if getattr(self, name) is not None
        }


class UpdateJobUseCase:
    """Use case for validated job updates, single or in bulk."""

    def __init__(
        self,
        job_repo: JobRepository,
        status_machine: Optional[StatusMachine] = None,
        clock: Clock = utc_now,
    ):
        self.job_repo = job_repo
        self.clock = clock
        self.status_machine = status_machine or StatusMachine(clock)

    async def execute(self, job_id: str, update: JobUpdate) -> Job:
        """
        Apply an update to one job.

        Raises:
            NotFoundError: if the job does not exist
            ValidationError: if completion data is invalid
            InvalidTransitionError: if the status change is not allowed
            InvalidStateError: if the job has no technician for ``assigned``,
                or changed status while the update was being applied
        """
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise NotFoundError("Job", job_id)

        changes = self._plan(job, update)
        await self._commit([(job, changes)])

        logger.info(
            "Job updated",
            job_id=job_id,
            fields=sorted(changes),
            status=(changes.get("status") or job.status).value,
        )
        return await self.job_repo.get_by_id(job_id)

    async def execute_bulk(self, updates: Sequence[Tuple[str, JobUpdate]]) -> List[Job]:
        """
        Apply several updates in one transaction.

        Every item is checked first. If any item fails, a single
        ``ValidationError`` lists the problems of all items and nothing is
        written.
        """
        if not updates:
            return []

        errors = []
        counts = Counter(job_id for job_id, _ in updates)
        for job_id, count in counts.items():
            if count > 1:
                errors.append(f"Job {job_id}: appears {count} times in the batch")

        jobs = await asyncio.gather(
            *(self.job_repo.get_by_id(job_id) for job_id, _ in updates)
        )

        planned = []
        for (job_id, update), job in zip(updates, jobs):
            try:
                if not job:
                    raise NotFoundError("Job", job_id)
                planned.append((job, self._plan(job, update)))
            except ValidationError as e:
                errors.extend(f"Job {job_id}: {error}" for error in e.errors)
            except JobError as e:
                errors.append(f"Job {job_id}: {e}")

        if errors:
            logger.info("Bulk update rejected", items=len(updates), errors=len(errors))
            raise ValidationError(errors, "Bulk update failed")

        await self._commit(planned)

        logger.info("Bulk update applied", items=len(planned))
        return list(
            await asyncio.gather(*(self.job_repo.get_by_id(job.id) for job, _ in planned))
        )

    def _plan(self, job: Job, update: JobUpdate) -> Dict[str, Any]:
        """Validate an update against a job and compute the field changes."""
        requested = None
        if update.status is not None:
            requested = self.status_machine.validate(job.status, update.status)

        completion = update.completion_payload()
        errors = list(validate_job_completion(completion).errors)

        # completed_at is stamped by the transition when entering completed
        has_completion_time = (
            update.completed_at or job.completed_at or requested == JobStatus.COMPLETED
        )
        if update.actual_duration is not None and not has_completion_time:
            errors.append("Actual duration can only be set once the job is completed")

        if errors:
            raise ValidationError(errors, "Job update is invalid")

        transition: Dict[str, Any] = {}
        if requested is not None:
            if requested == JobStatus.ASSIGNED and not job.assigned_technician_id:
                raise InvalidStateError(
                    f"Job {job.id} has no technician; assign it instead",
                    current_status=job.status.value,
                )
            transition = self.status_machine.transition(job, requested, completion)

        changes: Dict[str, Any] = {}
        for name in _PLAIN_FIELDS:
            value = getattr(update, name)
            if value is not None:
                changes[name] = value

        # timestamps stamped by the transition win over caller-supplied ones
        changes.update(transition)

        for name in ("completion_notes", "work_summary"):
            value = getattr(update, name)
            if value is not None:
                changes[name] = sanitize_string(value)

        if update.note is not None:
            changes["notes"] = [*job.notes, sanitize_string(update.note)]
        if update.internal_note is not None:
            changes["internal_notes"] = [
                *job.internal_notes,
                sanitize_string(update.internal_note),
            ]

        changes["updated_at"] = self.clock()
        return changes

    async def _commit(self, planned: Sequence[Tuple[Job, Dict[str, Any]]]) -> None:
        operations = []
        for job, changes in planned:
            operations.append(self.job_repo.status_precondition(job.id, job.status))
            operations.append(self.job_repo.update_operation(job.id, changes))

        try:
            await self.job_repo.store.transaction(operations)
        except TransactionConflictError as e:
            raise InvalidStateError(
                f"Job {e.document_id} changed while the update was applied"
            ) from e
