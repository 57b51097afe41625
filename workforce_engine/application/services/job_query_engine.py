"""
Job query engine.

Filters the store can express (status, priority, type, technician, schedule
range) are pushed down as predicates. Text search and radius filtering run in
the application over the fetched page, so a page may hold fewer matches than
its size even when more matches exist further down the stream. ``has_more``
means "more unfiltered candidates exist", not "more matches exist".
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from workforce_engine.application.interfaces.store import OrderBy, Predicate
from workforce_engine.config.logging import get_logger
from workforce_engine.config.settings import settings
from workforce_engine.domain.clock import Clock, as_utc, utc_now
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.exceptions.validation_error import ValidationError
from workforce_engine.domain.value_objects.job_priority import JobPriority
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.job_type import JobType
from workforce_engine.infrastructure.repositories.job_repository import JobRepository

logger = get_logger(__name__)

SORT_FIELDS = ("created_at", "scheduled_date")
SORT_ORDERS = ("asc", "desc")

_OPEN_STATUSES = [JobStatus.PENDING, JobStatus.ASSIGNED]


@dataclass(frozen=True)
class GeoFilter:
    """Keep jobs within ``radius_km`` of a point."""

    latitude: float
    longitude: float
    radius_km: float

    def contains(self, job: Job) -> bool:
        return job.distance_to(self.latitude, self.longitude) <= self.radius_km


@dataclass
class JobFilter:
    """Job listing filter. Empty collections and None mean "no constraint"."""

    statuses: List[JobStatus] = field(default_factory=list)
    priorities: List[JobPriority] = field(default_factory=list)
    types: List[JobType] = field(default_factory=list)
    technician_id: Optional[str] = None
    scheduled_from: Optional[datetime] = None
    scheduled_to: Optional[datetime] = None
    search_text: Optional[str] = None
    near: Optional[GeoFilter] = None


@dataclass
class JobPage:
    """One page of a job listing."""

    jobs: List[Job]
    has_more: bool
    # Last fetched record, before text and radius filtering
    next_cursor: Optional[str] = None


@dataclass
class NearbyJob:
    """A job with its distance from the query point."""

    job: Job
    distance_km: float


class JobQueryEngine:
    """Builds filtered, paginated job listings."""

    def __init__(self, job_repo: JobRepository, clock: Clock = utc_now):
        self.job_repo = job_repo
        self.clock = clock

    async def list_jobs(
        self,
        job_filter: Optional[JobFilter] = None,
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JobPage:
        """List jobs newest first."""
        job_filter = job_filter or JobFilter()
        return await self._fetch_page(
            job_filter,
            OrderBy("created_at", descending=True),
            self._page_size(page_size),
            cursor,
            job_filter.search_text,
            extended_search=False,
        )

    async def search_jobs(
        self,
        query: Optional[str] = None,
        job_filter: Optional[JobFilter] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page_size: Optional[int] = None,
        cursor: Optional[str] = None,
    ) -> JobPage:
        """
        Search jobs by free text over an extended set of fields.

        Args:
            query: Text matched against title, description, customer name,
                address, city, type, priority and skills. Falls back to the
                filter's ``search_text``.
            job_filter: Store-side and radius constraints
            sort_by: ``created_at`` or ``scheduled_date``
            sort_order: ``asc`` or ``desc``
            page_size: Records fetched per page
            cursor: Id of the last record of the previous page
        """
        errors = []
        if sort_by not in SORT_FIELDS:
            errors.append(f"Sort field must be one of: {', '.join(SORT_FIELDS)}")
        if sort_order not in SORT_ORDERS:
            errors.append(f"Sort order must be one of: {', '.join(SORT_ORDERS)}")
        if errors:
            raise ValidationError(errors, "Invalid search request")

        job_filter = job_filter or JobFilter()
        return await self._fetch_page(
            job_filter,
            OrderBy(sort_by, descending=sort_order == "desc"),
            self._page_size(page_size),
            cursor,
            query or job_filter.search_text,
            extended_search=True,
        )

    async def get_technician_jobs(
        self, technician_id: str, statuses: Optional[Sequence[JobStatus]] = None
    ) -> List[Job]:
        """All jobs assigned to a technician, earliest scheduled first."""
        predicates = [JobRepository.where("assigned_technician_id", "==", technician_id)]
        if statuses:
            predicates.append(JobRepository.where("status", "in", list(statuses)))

        return await self.job_repo.query(
            predicates=predicates, order_by=OrderBy("scheduled_date")
        )

    async def get_jobs_by_proximity(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        max_results: Optional[int] = None,
    ) -> List[NearbyJob]:
        """Open jobs within ``radius_km`` of a point, nearest first."""
        errors = []
        if not -90 <= latitude <= 90:
            errors.append("Valid latitude is required (-90 to 90)")
        if not -180 <= longitude <= 180:
            errors.append("Valid longitude is required (-180 to 180)")
        if radius_km <= 0:
            errors.append("Radius must be greater than 0 km")
        if max_results is not None and max_results <= 0:
            errors.append("Maximum results must be greater than 0")
        if errors:
            raise ValidationError(errors, "Invalid proximity query")

        max_results = max_results or settings.PROXIMITY_MAX_RESULTS
        candidates = await self.job_repo.query(
            predicates=[JobRepository.where("status", "in", _OPEN_STATUSES)],
            order_by=OrderBy("created_at", descending=True),
            limit=max_results * settings.PROXIMITY_CANDIDATE_MULTIPLIER,
        )

        nearby = []
        for job in candidates:
            distance = job.distance_to(latitude, longitude)
            if distance <= radius_km:
                nearby.append(NearbyJob(job=job, distance_km=distance))
        nearby.sort(key=lambda item: item.distance_km)

        logger.info(
            "Proximity query completed",
            candidates=len(candidates),
            within_radius=len(nearby),
            radius_km=radius_km,
        )
        return nearby[:max_results]

    async def get_jobs_requiring_attention(
        self, now: Optional[datetime] = None
    ) -> List[Job]:
        """
        Jobs a dispatcher should look at.

        Union, in this order and without duplicates, of open jobs whose
        schedule has passed, open high or urgent jobs, and jobs in progress for
        longer than ``LONG_RUNNING_JOB_HOURS``.
        """
        now = as_utc(now) if now else self.clock()
        open_statuses = JobRepository.where("status", "in", _OPEN_STATUSES)
        long_running_since = now - timedelta(hours=settings.LONG_RUNNING_JOB_HOURS)

        overdue, high_priority, long_running = await asyncio.gather(
            self.job_repo.query(
                predicates=[open_statuses, JobRepository.where("scheduled_date", "<", now)],
                order_by=OrderBy("scheduled_date"),
            ),
            self.job_repo.query(
                predicates=[
                    open_statuses,
                    JobRepository.where(
                        "priority", "in", [JobPriority.HIGH, JobPriority.URGENT]
                    ),
                ],
                order_by=OrderBy("scheduled_date"),
            ),
            self.job_repo.query(
                predicates=[
                    JobRepository.where("status", "==", JobStatus.IN_PROGRESS),
                    JobRepository.where("started_at", "<", long_running_since),
                ],
                order_by=OrderBy("started_at"),
            ),
        )

        seen = set()
        jobs = []
        for job in [*overdue, *high_priority, *long_running]:
            if job.id not in seen:
                seen.add(job.id)
                jobs.append(job)

        logger.info(
            "Attention query completed",
            overdue=len(overdue),
            high_priority=len(high_priority),
            long_running=len(long_running),
            total=len(jobs),
        )
        return jobs

    async def _fetch_page(
        self,
        job_filter: JobFilter,
        order_by: OrderBy,
        page_size: int,
        cursor: Optional[str],
        search_text: Optional[str],
        extended_search: bool,
    ) -> JobPage:
        # One extra record tells whether another page exists
        records = await self.job_repo.query(
            predicates=self._predicates(job_filter),
            order_by=order_by,
            limit=page_size + 1,
            after_id=cursor,
        )
        has_more = len(records) > page_size
        page = records[:page_size]

        jobs = page
        if search_text and search_text.strip():
            text = search_text.strip()
            jobs = [job for job in jobs if job.matches_text(text, extended=extended_search)]
        if job_filter.near is not None:
            jobs = [job for job in jobs if job_filter.near.contains(job)]

        logger.debug(
            "Job page fetched",
            fetched=len(page),
            matched=len(jobs),
            has_more=has_more,
            cursor=cursor,
        )
        return JobPage(
            jobs=jobs,
            has_more=has_more,
            next_cursor=page[-1].id if has_more else None,
        )

    @staticmethod
    def _predicates(job_filter: JobFilter) -> List[Predicate]:
        predicates = []
        if job_filter.statuses:
            predicates.append(JobRepository.where("status", "in", list(job_filter.statuses)))
        if job_filter.priorities:
            predicates.append(
                JobRepository.where("priority", "in", list(job_filter.priorities))
            )
        if job_filter.types:
            predicates.append(JobRepository.where("type", "in", list(job_filter.types)))
        if job_filter.technician_id:
            predicates.append(
                JobRepository.where("assigned_technician_id", "==", job_filter.technician_id)
            )
        if job_filter.scheduled_from:
            predicates.append(
                JobRepository.where("scheduled_date", ">=", job_filter.scheduled_from)
            )
        if job_filter.scheduled_to:
            predicates.append(
                JobRepository.where("scheduled_date", "<=", job_filter.scheduled_to)
            )
        return predicates

    @staticmethod
    def _page_size(page_size: Optional[int]) -> int:
        if page_size is None:
            return settings.DEFAULT_PAGE_SIZE
        if not 1 <= page_size <= settings.MAX_PAGE_SIZE:
            raise ValidationError(
                [f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}"],
                "Invalid page request",
            )
        return page_size
