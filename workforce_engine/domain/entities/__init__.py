"""
Domain entities package.
"""

from .assignment import Assignment
from .job import MAX_PHOTOS, Job
from .technician import Technician

__all__ = [
    "Assignment",
    "Job",
    "MAX_PHOTOS",
    "Technician",
]
