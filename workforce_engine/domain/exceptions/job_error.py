"""
Job lifecycle domain exceptions.
"""

from typing import Optional


class JobError(Exception):
    """Base exception for engine errors."""

    pass


class NotFoundError(JobError):
    """Raised when a referenced job or technician does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidTransitionError(JobError):
    """Raised when a status change is not in the transition table."""

    def __init__(self, current_status: str, requested_status: str):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Invalid status transition from {current_status} to {requested_status}"
        )


class InvalidStateError(JobError):
    """Raised when a job or technician is not in the state an operation needs."""

    def __init__(self, message: str, current_status: Optional[str] = None):
        self.current_status = current_status
        super().__init__(message)


class TechnicianUnavailableError(InvalidStateError):
    """Raised when a technician cannot receive assignments."""

    def __init__(self, technician_id: str, reason: str):
        self.technician_id = technician_id
        self.reason = reason
        super().__init__(f"Technician {technician_id} is unavailable: {reason}")
