"""Job domain entity."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from workforce_engine.domain.value_objects.customer import Customer
from workforce_engine.domain.value_objects.job_priority import JobPriority
from workforce_engine.domain.value_objects.job_requirements import JobRequirements
from workforce_engine.domain.value_objects.job_status import JobStatus
from workforce_engine.domain.value_objects.job_type import JobType
from workforce_engine.domain.value_objects.location import Location
from workforce_engine.domain.value_objects.time_slot import TimeSlot

MAX_PHOTOS = 10

# Statuses a job can only be in after it was handed to a technician
_ASSIGNED_STATUSES = {
    JobStatus.ASSIGNED,
    JobStatus.IN_PROGRESS,
    JobStatus.ON_HOLD,
    JobStatus.COMPLETED,
}


def new_id() -> str:
    return uuid4().hex


@dataclass
class Job:
    """Job domain entity."""

    title: str
    description: str
    type: JobType
    priority: JobPriority
    customer: Customer
    location: Location
    scheduled_date: datetime
    scheduled_time_slot: TimeSlot
    estimated_duration: int
    requirements: JobRequirements
    created_by: str
    id: str = field(default_factory=new_id)
    status: JobStatus = JobStatus.PENDING

    # Assignment
    assigned_technician_id: Optional[str] = None
    assigned_by: Optional[str] = None
    assigned_at: Optional[datetime] = None

    # Progress tracking
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    actual_duration: Optional[int] = None

    notes: List[str] = field(default_factory=list)
    internal_notes: List[str] = field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Completion details
    completion_notes: Optional[str] = None
    customer_signature: Optional[str] = None
    photos: List[str] = field(default_factory=list)
    work_summary: Optional[str] = None

    search_keywords: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate job invariants."""
        if not self.title or not self.title.strip():
            raise ValueError("Job title is required")
        if not self.created_by or not self.created_by.strip():
            raise ValueError("Job creator is required")
        if len(self.photos) > MAX_PHOTOS:
            raise ValueError(f"Maximum {MAX_PHOTOS} photos allowed per job")
        if self.actual_duration is not None and self.completed_at is None:
            raise ValueError("Actual duration requires a completion time")
        if self.status in _ASSIGNED_STATUSES and not self.assigned_technician_id:
            raise ValueError(f"Job in status {self.status.value} has no technician")
        if self.status == JobStatus.PENDING and self.assigned_technician_id:
            raise ValueError("Pending job cannot have a technician")

        # Set timestamps if not provided
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    @property
    def required_skills(self) -> List[str]:
        """Get the distinct skills the job requires, in declaration order."""
        return list(dict.fromkeys(self.requirements.skills))

    def distance_to(self, latitude: float, longitude: float) -> float:
        """Distance in kilometres from the job site to the given coordinates."""
        return self.location.distance_to(latitude, longitude)

    def matches_text(self, text: str, extended: bool = False) -> bool:
        """Case-insensitive substring match over the job's searchable fields."""
        needle = text.lower()
        fields = [
            self.title,
            self.description,
            self.customer.name,
            self.location.address,
        ]
        if extended:
            fields.extend(
                [
                    self.location.city,
                    self.type.value,
                    self.priority.value,
                    *self.requirements.skills,
                ]
            )
        return any(needle in value.lower() for value in fields if value)

    def build_search_keywords(self) -> List[str]:
        """Derive lowercase search tokens from descriptive fields."""
        keywords = []
        keywords.extend(re.split(r"\s+", self.title.lower()))
        keywords.extend(re.split(r"\s+", self.description.lower()))
        keywords.append(self.customer.name.lower())
        keywords.append(self.location.city.lower())
        keywords.append(self.location.state.lower())
        keywords.append(self.location.address.lower())
        keywords.append(self.type.value)
        keywords.append(self.priority.value)
        keywords.extend(skill.lower() for skill in self.requirements.skills)

        # Remove duplicates and empty strings
        return list(dict.fromkeys(keyword for keyword in keywords if keyword))
