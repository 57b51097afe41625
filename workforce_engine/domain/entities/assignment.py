"""Assignment domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4


@dataclass(frozen=True)
class Assignment:
    """Immutable record pairing a job with a technician at a point in time.

    A re-assignment creates a new record instead of mutating an old one.
    """

    job_id: str
    technician_id: str
    assigned_by: str
    assigned_at: datetime
    notes: Optional[str] = None
    assignment_reason: str = "manual"
    id: str = field(default_factory=lambda: uuid4().hex)
