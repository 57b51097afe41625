"""Create job use case."""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from workforce_engine.application.services.data_sanitizer import sanitize_job_payload
from workforce_engine.application.services.job_validation import validate_job_creation
from workforce_engine.config.logging import get_logger
from workforce_engine.domain.clock import Clock, utc_now
from workforce_engine.domain.entities.job import Job, new_id
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.infrastructure.repositories.documents import JobDocument
from workforce_engine.infrastructure.repositories.job_repository import JobRepository

logger = get_logger(__name__)

# Fields a caller may set on creation; everything else is owned by the engine
CREATION_FIELDS = (
    "title",
    "description",
    "type",
    "priority",
    "customer",
    "location",
    "scheduled_date",
    "scheduled_time_slot",
    "estimated_duration",
    "requirements",
    "created_by",
    "notes",
    "internal_notes",
)


class CreateJobUseCase:
    """Use case for creating a pending job."""

    def __init__(self, job_repo: JobRepository, clock: Clock = utc_now):
        self.job_repo = job_repo
        self.clock = clock

    async def execute(self, payload: Mapping) -> Job:
        """
        Validate, sanitise and persist a new job.

        Validation runs on the raw payload; the sanitised copy is what gets
        stored. New jobs always start ``pending`` with no technician.

        Raises:
            ValidationError: listing every violated rule
        """
        now = self.clock()
        validate_job_creation(payload, now=now).raise_for_errors("Job creation failed")

        sanitized = sanitize_job_payload(
            {name: payload[name] for name in CREATION_FIELDS if name in payload}
        )
        job = self._build_job(sanitized, now)
        job.search_keywords = job.build_search_keywords()

        await self.job_repo.create(job)

        logger.info(
            "Job created",
            job_id=job.id,
            type=job.type.value,
            priority=job.priority.value,
            created_by=job.created_by,
            address=job.location.full_address,
        )
        return job

    @staticmethod
    def _build_job(data: Mapping, now: Any) -> Job:
        record = {
            **data,
            "id": new_id(),
            "status": JobStatus.PENDING,
            "created_at": now,
            "updated_at": now,
        }
        try:
            return JobDocument.model_validate(record).to_entity()
        except (PydanticValidationError, ValueError) as e:
            # Sanitising can empty a field that passed validation
            raise ValidationError([str(e)], "Job creation failed") from e
