"""
Domain package.
"""

from .entities import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Assignment",
    "Job",
    "Technician",

    # Exceptions
    "JobError",
    "NotFoundError",
    "InvalidTransitionError",
    "InvalidStateError",
    "TechnicianUnavailableError",
    "StoreError",
    "DocumentNotFoundError",
    "TransactionConflictError",
    "DocumentDecodeError",
    "ValidationError",

    # Value Objects
    "Customer",
    "Equipment",
    "GeoPoint",
    "JobPriority",
    "JobRequirements",
    "JobStatus",
    "JobType",
    "Location",
    "TimeSlot",
    "UserRole",
    "haversine_distance",
]
