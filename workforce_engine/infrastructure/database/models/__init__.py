"""
Database models package.
"""

from .base import Base, BaseModel
from .document import DocumentModel

__all__ = [
    "Base",
    "BaseModel",
    "DocumentModel",
]
