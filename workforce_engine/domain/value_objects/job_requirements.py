"""
Job requirements value object.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .equipment import Equipment


@dataclass(frozen=True)
class JobRequirements:
    """Skills, equipment and tools a job requires."""

    skills: List[str] = field(default_factory=list)
    equipment: List[Equipment] = field(default_factory=list)
    tools: List[str] = field(default_factory=list)
    estimated_duration: Optional[int] = None
    special_instructions: Optional[str] = None
