"""
Domain value objects package.
"""

from .customer import Customer
from .equipment import Equipment
from .job_priority import JobPriority
from .job_requirements import JobRequirements
from .job_status import JobStatus
from .job_type import JobType
from .location import EARTH_RADIUS_KM, GeoPoint, Location, haversine_distance
from .time_slot import TIME_PATTERN, TimeSlot, to_minutes
from .user_role import UserRole

__all__ = [
    "Customer",
    "Equipment",
    "JobPriority",
    "JobRequirements",
    "JobStatus",
    "JobType",
    "EARTH_RADIUS_KM",
    "GeoPoint",
    "Location",
    "haversine_distance",
    "TIME_PATTERN",
    "TimeSlot",
    "to_minutes",
    "UserRole",
]
