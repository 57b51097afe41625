"""
Technician domain entity.
"""

from datetime import datetime, timezone
from typing import List, Optional

from workforce_engine.domain.value_objects.location import GeoPoint
from workforce_engine.domain.value_objects.user_role import UserRole


class Technician:
    """User that can be dispatched to jobs, distinguished by role and active flag."""

    def __init__(
        self,
        id: str,
        name: str,
        email: str,
        role: UserRole = UserRole.TECHNICIAN,
        is_active: bool = True,
        skills: Optional[List[str]] = None,
        current_location: Optional[GeoPoint] = None,
        phone: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.name = name
        self.email = email
        self.role = role
        self.is_active = is_active
        self.skills = skills or []
        self.current_location = current_location
        self.phone = phone
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at

    def __repr__(self) -> str:
        return f"<Technician(id={self.id}, role={self.role.value}, active={self.is_active})>"

    def has_skill(self, skill: str) -> bool:
        """Check if the technician lists the given skill."""
        return skill in self.skills
