"""
Equipment value object.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Equipment:
    """Piece of equipment a job needs on site."""

    name: str
    model: str
    quantity: int
    serial_number: Optional[str] = None
    description: Optional[str] = None
