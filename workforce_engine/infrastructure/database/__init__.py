"""
Database package.
"""

from .document_store import SqlAlchemyDocumentStore, create_schema
from .models import Base, DocumentModel

__all__ = [
    "Base",
    "DocumentModel",
    "SqlAlchemyDocumentStore",
    "create_schema",
]
