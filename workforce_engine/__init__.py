"""
Workforce Engine.

Rules engine for assigning field-service jobs to technicians and governing
each job's lifecycle from creation to completion.
"""

__version__ = "0.1.0"
__author__ = "WorkForce Navigator Team"
__description__ = "Field-service job assignment and lifecycle engine"

from .application.services.job_manager import JobManager
from .config import settings

__all__ = [
    "JobManager",
    "settings",
]
