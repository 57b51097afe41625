"""
Job status value object and its transition table.
"""

from enum import Enum
from typing import FrozenSet


class JobStatus(str, Enum):
    """Job lifecycle status enumeration."""

    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    CANCELLED = "cancelled"

    def allowed_transitions(self) -> FrozenSet["JobStatus"]:
        """Get the statuses this status may move to."""
        return _TRANSITIONS[self]

    def can_transition_to(self, new_status: "JobStatus") -> bool:
        """Check if moving to ``new_status`` is legal. There are no self-loops."""
        return new_status in _TRANSITIONS[self]

    def is_terminal(self) -> bool:
        """Check if status is final (no more transitions)."""
        return not _TRANSITIONS[self]

    def is_open(self) -> bool:
        """Check if the job still waits for a technician to start work."""
        return self in (JobStatus.PENDING, JobStatus.ASSIGNED)


_TRANSITIONS = {
    JobStatus.PENDING: frozenset({JobStatus.ASSIGNED, JobStatus.CANCELLED}),
    JobStatus.ASSIGNED: frozenset(
        {JobStatus.IN_PROGRESS, JobStatus.CANCELLED, JobStatus.ON_HOLD}
    ),
    JobStatus.IN_PROGRESS: frozenset(
        {JobStatus.COMPLETED, JobStatus.ON_HOLD, JobStatus.CANCELLED}
    ),
    JobStatus.ON_HOLD: frozenset(
        {JobStatus.ASSIGNED, JobStatus.IN_PROGRESS, JobStatus.CANCELLED}
    ),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.CANCELLED: frozenset(),
}
