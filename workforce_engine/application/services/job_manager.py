"""
Job manager: the public surface of the engine.

Wires repositories, services and use cases over one explicit document store
handle. It holds no state besides its collaborators, so any number of
managers may share a store.
"""

from datetime import datetime
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from workforce_engine.application.interfaces.store import DocumentStoreInterface, OrderBy
from workforce_engine.application.services.job_query_engine import (
    JobFilter,
    JobPage,
    JobQueryEngine,
    NearbyJob,
)
from workforce_engine.application.services.job_recommendation_engine import (
    JobRecommendationEngine,
)
from workforce_engine.application.services.job_statistics import (
    JobStats,
    TechnicianWorkload,
    compute_stats,
    compute_workload,
)
from workforce_engine.application.services.status_machine import StatusMachine
from workforce_engine.application.use_cases.assign_job import AssignJobUseCase, JobAssignment
from workforce_engine.application.use_cases.create_job import CreateJobUseCase
from workforce_engine.application.use_cases.update_job import JobUpdate, UpdateJobUseCase
from workforce_engine.config.database import create_engine, get_async_session_factory
from workforce_engine.config.logging import get_logger
from workforce_engine.config.settings import settings
from workforce_engine.domain.clock import Clock, utc_now
from workforce_engine.domain.entities.assignment import Assignment
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.exceptions.job_error import NotFoundError
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.infrastructure.database.document_store import (
    SqlAlchemyDocumentStore,
    create_schema,
)
from workforce_engine.infrastructure.repositories.assignment_repository import (
    AssignmentRepository,
)
from workforce_engine.infrastructure.repositories.job_repository import JobRepository
from workforce_engine.infrastructure.repositories.technician_repository import (
    TechnicianRepository,
)

logger = get_logger(__name__)


class JobManager:
    """Facade over job creation, lifecycle, assignment, queries and statistics."""

    def __init__(self, store: DocumentStoreInterface, clock: Clock = utc_now):
        self.store = store
        self.clock = clock

        self.job_repo = JobRepository(store)
        self.technician_repo = TechnicianRepository(store)
        self.assignment_repo = AssignmentRepository(store)

        self.status_machine = StatusMachine(clock)
        self.query_engine = JobQueryEngine(self.job_repo, clock)
        self.recommendation_engine = JobRecommendationEngine()

        self.create_job_use_case = CreateJobUseCase(self.job_repo, clock)
        self.update_job_use_case = UpdateJobUseCase(
            self.job_repo, self.status_machine, clock
        )
        self.assign_job_use_case = AssignJobUseCase(
            self.job_repo, self.technician_repo, self.assignment_repo, clock
        )

    # Lifecycle

    async def create_job(self, payload: Mapping[str, Any]) -> Job:
        """Create a pending job from a raw payload."""
        return await self.create_job_use_case.execute(payload)

    async def get_job(self, job_id: str) -> Optional[Job]:
        """Get a job by id, or None if it does not exist."""
        return await self.job_repo.get_by_id(job_id)

    async def update_job(self, job_id: str, update: JobUpdate) -> Job:
        return await self.update_job_use_case.execute(job_id, update)

    async def bulk_update_jobs(self, updates: Sequence[Tuple[str, JobUpdate]]) -> List[Job]:
        return await self.update_job_use_case.execute_bulk(updates)

    async def delete_job(self, job_id: str) -> bool:
        """Hard delete a job. Returns False if it did not exist."""
        deleted = await self.job_repo.delete(job_id)
        logger.info("Job deleted", job_id=job_id, deleted=deleted)
        return deleted

    async def assign_job(self, request: JobAssignment) -> Assignment:
        return await self.assign_job_use_case.execute(request)

    async def get_assignment_history(self, job_id: str) -> List[Assignment]:
        """Every assignment ever made for a job, oldest first."""
        return await self.assignment_repo.get_by_job_id(job_id)

    # Queries

    async def list_jobs(
        self,
        job_filter: Optional[JobFilter] = None,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JobPage:
        return await self.query_engine.list_jobs(job_filter, page_size, cursor)

    async def search_jobs(
        self,
        query: Optional[str] = None,
        job_filter: Optional[JobFilter] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JobPage:
        return await self.query_engine.search_jobs(
            query, job_filter, sort_by, sort_order, page_size, cursor
        )

    async def get_technician_jobs(
        self, technician_id: str, statuses: Optional[Sequence[JobStatus]] = None
    ) -> List[Job]:
        return await self.query_engine.get_technician_jobs(technician_id, statuses)

    async def get_jobs_by_proximity(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        max_results: Optional[int] = None,
    ) -> List[NearbyJob]:
        return await self.query_engine.get_jobs_by_proximity(
            latitude, longitude, radius_km, max_results
        )

    async def get_jobs_requiring_attention(self, now: Optional[datetime] = None) -> List[Job]:
        return await self.query_engine.get_jobs_requiring_attention(now)

    async def recommend_jobs(
        self, technician_id: str, max_results: Optional[int] = None
    ) -> List[Job]:
        """
        Recommend pending jobs for a technician.

        The candidate pool is the newest pending jobs, a multiple of
        ``max_results`` in size.

        Raises:
            NotFoundError: if the technician does not exist
            ValidationError: if max_results is not positive
        """
        if max_results is None:
            max_results = settings.RECOMMENDATION_MAX_RESULTS
        elif max_results <= 0:
            raise ValidationError(
                ["Maximum results must be greater than 0"], "Invalid recommendation request"
            )

        technician = await self.technician_repo.get_by_id(technician_id)
        if not technician:
            raise NotFoundError("Technician", technician_id)

        candidates = await self.job_repo.query(
            predicates=[JobRepository.where("status", "==", JobStatus.PENDING)],
            order_by=OrderBy("created_at", descending=True),
            limit=max_results * settings.RECOMMENDATION_CANDIDATE_MULTIPLIER,
        )
        return self.recommendation_engine.recommend(technician, candidates, max_results)

    # Statistics

    async def get_job_stats(
        self,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> JobStats:
        """Job counts per status, optionally limited to a creation window."""
        predicates = []
        if created_from:
            predicates.append(JobRepository.where("created_at", ">=", created_from))
        if created_to:
            predicates.append(JobRepository.where("created_at", "<=", created_to))
        return compute_stats(await self.job_repo.query(predicates=predicates))

    async def get_technician_workload(self, technician_id: str) -> TechnicianWorkload:
        """
        Workload summary of a technician.

        Raises:
            NotFoundError: if the technician does not exist
        """
        technician = await self.technician_repo.get_by_id(technician_id)
        if not technician:
            raise NotFoundError("Technician", technician_id)

        jobs = await self.query_engine.get_technician_jobs(technician_id)
        workload = compute_workload(technician_id, jobs, now=self.clock())
        workload.technician_name = technician.name
        workload.current_location = technician.current_location
        return workload


async def build_sql_job_manager(
    database_url: Optional[str] = None,
    create_tables: bool = False,
    clock: Clock = utc_now,
) -> JobManager:
    """
    Build a manager over the SQLAlchemy document store.

    Args:
        database_url: Database URL; ``DATABASE_URL`` from settings by default
        create_tables: Create the documents table if it does not exist
        clock: Time source
    """
    engine = create_engine(database_url)
    if create_tables:
        await create_schema(engine)
    store = SqlAlchemyDocumentStore(get_async_session_factory(engine))
    return JobManager(store, clock)
