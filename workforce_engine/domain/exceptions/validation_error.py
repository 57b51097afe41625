"""
Validation-related domain exceptions.
"""

from typing import Iterable

from .job_error import JobError


class ValidationError(JobError):
    """Raised when one or more business rules are violated.

    Every violated rule is carried in ``errors`` so callers can surface the
    whole list in a single round trip.
    """

    def __init__(self, errors: Iterable[str], context: str = "Validation failed"):
        self.errors = list(errors)
        self.context = context
        super().__init__(f"{context}: {', '.join(self.errors)}")
