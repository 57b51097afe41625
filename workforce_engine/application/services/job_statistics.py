"""
Job statistics and technician workload aggregation.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from workforce_engine.config.settings import settings
from workforce_engine.domain.clock import as_utc, utc_now
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.location import GeoPoint


@dataclass
class JobStats:
    """Job counts per status."""

    total: int = 0
    pending: int = 0
    assigned: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
    on_hold: int = 0


@dataclass
class TechnicianWorkload:
    """Workload summary of one technician."""

    technician_id: str
    technician_name: Optional[str] = None
    active_jobs: int = 0
    scheduled_jobs: int = 0
    completed_today: int = 0
    average_job_duration: float = 0.0
    current_location: Optional[GeoPoint] = None


_STATUS_BUCKETS = {
    JobStatus.PENDING.value: "pending",
    JobStatus.ASSIGNED.value: "assigned",
    JobStatus.IN_PROGRESS.value: "in_progress",
    JobStatus.COMPLETED.value: "completed",
    JobStatus.CANCELLED.value: "cancelled",
    JobStatus.ON_HOLD.value: "on_hold",
}


def compute_stats(jobs: Iterable[Job]) -> JobStats:
    """Count jobs per status in a single pass. Unknown statuses only count in ``total``."""
    stats = JobStats()
    for job in jobs:
        stats.total += 1
        status = getattr(job.status, "value", job.status)
        bucket = _STATUS_BUCKETS.get(status)
        if bucket:
            setattr(stats, bucket, getattr(stats, bucket) + 1)
    return stats


def today_bounds(now: datetime, tz: tzinfo):
    """Start of today and start of tomorrow in ``tz``, as UTC datetimes."""
    local_now = as_utc(now).astimezone(tz)
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    # Rebuild through naive arithmetic so DST days keep their real length
    end = (start.replace(tzinfo=None) + timedelta(days=1)).replace(tzinfo=tz)
    return as_utc(start), as_utc(end)


def compute_workload(
    technician_id: str,
    jobs: Iterable[Job],
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> TechnicianWorkload:
    """
    Summarise a technician's workload.

    Args:
        technician_id: Technician to summarise
        jobs: Candidate jobs; jobs assigned to anyone else are ignored
        now: Reference time for "today"
        tz: Zone that defines "today", ``WORKLOAD_TIMEZONE`` by default

    Returns:
        TechnicianWorkload with active (in progress), scheduled (assigned),
        completed-today counts and the mean actual duration
    """
    now = now or utc_now()
    tz = tz or ZoneInfo(settings.WORKLOAD_TIMEZONE)
    start_of_today, start_of_tomorrow = today_bounds(now, tz)

    workload = TechnicianWorkload(technician_id=technician_id)
    durations = []
    for job in jobs:
        if job.assigned_technician_id != technician_id:
            continue
        if job.status == JobStatus.IN_PROGRESS:
            workload.active_jobs += 1
        elif job.status == JobStatus.ASSIGNED:
            workload.scheduled_jobs += 1
        if job.completed_at and start_of_today <= as_utc(job.completed_at) < start_of_tomorrow:
            workload.completed_today += 1
        if job.actual_duration is not None:
            durations.append(job.actual_duration)

    if durations:
        workload.average_job_duration = sum(durations) / len(durations)
    return workload
