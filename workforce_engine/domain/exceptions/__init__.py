"""
Domain exceptions package.
"""

from .job_error import (
    InvalidStateError,
    InvalidTransitionError,
    JobError,
    NotFoundError,
    TechnicianUnavailableError,
)
from .store_error import (
    DocumentDecodeError,
    DocumentNotFoundError,
    StoreError,
    TransactionConflictError,
)
from .validation_error import ValidationError

__all__ = [
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
]
