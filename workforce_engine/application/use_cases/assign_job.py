"""Assign job use case."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from workforce_engine.application.services.data_sanitizer import sanitize_string
from workforce_engine.application.services.job_validation import validate_job_assignment
from workforce_engine.config.logging import get_logger
from workforce_engine.domain.clock import Clock, as_utc, utc_now
from workforce_engine.domain.entities.assignment import Assignment
from workforce_engine.domain.exceptions.job_error import (
    InvalidStateError,
    NotFoundError,
    TechnicianUnavailableError,
)
from workforce_engine.domain.exceptions.store_error import TransactionConflictError
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.user_role import UserRole
from workforce_engine.infrastructure.repositories.assignment_repository import (
    AssignmentRepository,
)
from workforce_engine.infrastructure.repositories.job_repository import JobRepository
from workforce_engine.infrastructure.repositories.technician_repository import (
    TechnicianRepository,
)

logger = get_logger(__name__)


@dataclass
class JobAssignment:
    """Request for assigning a job to a technician."""

    job_id: str
    technician_id: str
    assigned_by: str
    assigned_at: Optional[datetime] = None
    notes: Optional[str] = None


class AssignJobUseCase:
    """Use case for assigning a pending job to an eligible technician."""

    def __init__(
        self,
        job_repo: JobRepository,
        technician_repo: TechnicianRepository,
        assignment_repo: AssignmentRepository,
        clock: Clock = utc_now,
    ):
        self.job_repo = job_repo
        self.technician_repo = technician_repo
        self.assignment_repo = assignment_repo
        self.clock = clock

    async def execute(self, request: JobAssignment) -> Assignment:
        """
        Assign a job. Checks run in order and the first failure wins.

        The job update and the new assignment record are written in one
        transaction guarded by ``status == pending``, so of two concurrent
        assignments of the same job exactly one succeeds.

        Raises:
            ValidationError: if an id or the assigner is missing
            NotFoundError: if the job or the technician does not exist
            InvalidStateError: if the job is not pending, including when a
                concurrent assignment won
            TechnicianUnavailableError: if the technician is inactive or is
                not a technician
            StoreError: if the store fails
        """
        logger.info(
            "Starting job assignment",
            job_id=request.job_id,
            technician_id=request.technician_id,
            assigned_by=request.assigned_by,
        )

        # 1. Structural validation
        validate_job_assignment(
            request.job_id, request.technician_id, request.assigned_by
        ).raise_for_errors("Job assignment is invalid")

        # 2-3. Job exists and is waiting for a technician
        job = await self.job_repo.get_by_id(request.job_id)
        if not job:
            raise NotFoundError("Job", request.job_id)
        if job.status != JobStatus.PENDING:
            raise InvalidStateError(
                f"Job {job.id} cannot be assigned in status {job.status.value}",
                current_status=job.status.value,
            )

        # 4-6. Technician exists and may receive jobs
        technician = await self.technician_repo.get_by_id(request.technician_id)
        if not technician:
            raise NotFoundError("Technician", request.technician_id)
        if not technician.is_active:
            raise TechnicianUnavailableError(technician.id, "technician is not active")
        if technician.role != UserRole.TECHNICIAN:
            raise TechnicianUnavailableError(
                technician.id, f"user has role {technician.role.value}"
            )

        now = self.clock()
        assigned_at = as_utc(request.assigned_at) if request.assigned_at else now
        assignment = Assignment(
            job_id=job.id,
            technician_id=technician.id,
            assigned_by=request.assigned_by,
            assigned_at=assigned_at,
            notes=sanitize_string(request.notes) if request.notes else None,
        )
        changes = {
            "assigned_technician_id": technician.id,
            "assigned_by": request.assigned_by,
            "assigned_at": assigned_at,
            "status": JobStatus.ASSIGNED,
            "updated_at": now,
        }

        try:
            await self.job_repo.store.transaction(
                [
                    self.job_repo.status_precondition(job.id, JobStatus.PENDING),
                    self.job_repo.update_operation(job.id, changes),
                    self.assignment_repo.put_operation(assignment),
                ]
            )
        except TransactionConflictError as e:
            logger.info(
                "Job assignment lost to a concurrent change",
                job_id=job.id,
                technician_id=technician.id,
            )
            raise InvalidStateError(
                f"Job {job.id} is no longer pending", current_status=None
            ) from e

        logger.info(
            "Job assigned",
            job_id=job.id,
            technician_id=technician.id,
            assignment_id=assignment.id,
        )
        return assignment
