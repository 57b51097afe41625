"""
Customer value object.
"""

from dataclasses import dataclass
from typing import Optional

from .location import Location


@dataclass(frozen=True)
class Customer:
    """Customer the job is performed for."""

    name: str
    phone: str
    email: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[Location] = None
    notes: Optional[str] = None

    def __post_init__(self):
        """Validate customer fields."""
        if not self.name or not self.name.strip():
            raise ValueError("Customer name is required")
