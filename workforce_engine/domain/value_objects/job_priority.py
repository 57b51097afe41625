"""
Job priority value object.
"""

from enum import Enum


class JobPriority(str, Enum):
    """Job priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    def needs_attention(self) -> bool:
        """Check if priority alone flags the job for dispatcher attention."""
        return self in (JobPriority.HIGH, JobPriority.URGENT)
