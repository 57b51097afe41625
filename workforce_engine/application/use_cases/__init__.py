"""
Application use cases.
"""

from .assign_job import AssignJobUseCase, JobAssignment
from .create_job import CreateJobUseCase
from .update_job import JobUpdate, UpdateJobUseCase

__all__ = [
    "AssignJobUseCase",
    "CreateJobUseCase",
    "JobAssignment",
    "JobUpdate",
    "UpdateJobUseCase",
]
