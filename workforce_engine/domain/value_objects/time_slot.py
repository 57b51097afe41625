"""
Scheduled time slot value object.
"""

import re
from dataclasses import dataclass

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


def to_minutes(value: str) -> int:
    """Convert a 24-hour ``HH:MM`` string to minutes after midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


@dataclass(frozen=True)
class TimeSlot:
    """Same-day wall-clock window, ``start`` and ``end`` in ``HH:MM``."""

    start: str
    end: str

    @property
    def duration_minutes(self) -> int:
        """Length of the slot in minutes."""
        return to_minutes(self.end) - to_minutes(self.start)
