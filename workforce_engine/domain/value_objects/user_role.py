"""
User role value object.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user of the dispatch system."""

    ADMIN = "admin"
    MANAGER = "manager"
    TECHNICIAN = "technician"
