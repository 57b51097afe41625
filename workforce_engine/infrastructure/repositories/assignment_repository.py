"""Assignment repository implementation."""

from typing import List, Optional

from workforce_engine.application.interfaces.store import (
    DocumentStoreInterface,
    OrderBy,
    Predicate,
    PutOperation,
)
from workforce_engine.config.settings import settings
from workforce_engine.domain.entities.assignment import Assignment

from .documents import AssignmentDocument, decode, encode


class AssignmentRepository:
    """Typed access to the append-only assignment records."""

    def __init__(self, store: DocumentStoreInterface, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.ASSIGNMENTS_COLLECTION

    async def get_by_id(self, assignment_id: str) -> Optional[Assignment]:
        """Get assignment by ID."""
        record = await self.store.get(self.collection, assignment_id)
        if record is None:
            return None
        return decode(AssignmentDocument, self.collection, record)

    async def get_by_job_id(self, job_id: str) -> List[Assignment]:
        """Get every assignment ever made for a job, oldest first."""
        records = await self.store.query(
            self.collection,
            predicates=[Predicate("job_id", "==", job_id)],
            order_by=OrderBy("assigned_at"),
        )
        return [decode(AssignmentDocument, self.collection, record) for record in records]

    def put_operation(self, assignment: Assignment) -> PutOperation:
        """Write operation creating the assignment record."""
        return PutOperation(
            self.collection,
            assignment.id,
            encode(AssignmentDocument.from_entity(assignment)),
        )
