"""
Job type value object.
"""

from enum import Enum


class JobType(str, Enum):
    """Kind of field work a job represents."""

    INSTALLATION = "installation"
    REPAIR = "repair"
    MAINTENANCE = "maintenance"
    INSPECTION = "inspection"
    UPGRADE = "upgrade"
    EMERGENCY = "emergency"
