"""
Document store repositories package.
"""

from .assignment_repository import AssignmentRepository
from .job_repository import JobRepository
from .technician_repository import TechnicianRepository

__all__ = [
    "AssignmentRepository",
    "JobRepository",
    "TechnicianRepository",
]
