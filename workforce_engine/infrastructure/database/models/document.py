"""
Document SQLAlchemy model.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB

from .base import BaseModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """A JSON document addressed by collection and id."""

    __tablename__ = "documents"

    collection = Column(String(100), primary_key=True)
    id = Column(String(64), primary_key=True)
    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # Optimistic concurrency: every flush checks and bumps the version
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Document(collection={self.collection}, id={self.id}, version={self.version})>"
