"""Job repository implementation."""

from typing import Any, Dict, List, Optional, Sequence

from workforce_engine.application.interfaces.store import (
    DeleteOperation,
    DocumentStoreInterface,
    OrderBy,
    Precondition,
    Predicate,
    PutOperation,
    UpdateOperation,
)
from workforce_engine.config.logging import get_logger
from workforce_engine.config.settings import settings
from workforce_engine.domain.entities.job import Job
from workforce_engine.domain.value_objects.job_status import JobStatus

from .documents import JobDocument, decode, encode, to_json_value

logger = get_logger(__name__)


class JobRepository:
    """Typed access to the jobs collection."""

    def __init__(self, store: DocumentStoreInterface, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.JOBS_COLLECTION

    async def get_by_id(self, job_id: str) -> Optional[Job]:
        """Get job by ID."""
        record = await self.store.get(self.collection, job_id)
        return self._decode(record) if record is not None else None

    async def create(self, job: Job) -> Job:
        """Persist a new job."""
        await self.store.put(self.collection, job.id, self.encode(job))
        logger.debug("Job persisted", job_id=job.id, collection=self.collection)
        return job

    async def delete(self, job_id: str) -> bool:
        """Delete a job."""
        return await self.store.delete(self.collection, job_id)

    async def query(
        self,
        predicates: Sequence[Predicate] = (),
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
        after_id: Optional[str] = None,
    ) -> List[Job]:
        """Query jobs and decode every returned record."""
        records = await self.store.query(
            self.collection,
            predicates=predicates,
            order_by=order_by,
            limit=limit,
            after_id=after_id,
        )
        return [self._decode(record) for record in records]

    @staticmethod
    def where(field: str, op: str, value: Any) -> Predicate:
        """Build a predicate with the value in its stored representation."""
        return Predicate(field=field, op=op, value=to_json_value(value))

    def encode(self, job: Job) -> Dict[str, Any]:
        """Encode a job into a store record."""
        return encode(JobDocument.from_entity(job))

    def put_operation(self, job: Job) -> PutOperation:
        return PutOperation(self.collection, job.id, self.encode(job))

    def update_operation(self, job_id: str, changes: Dict[str, Any]) -> UpdateOperation:
        return UpdateOperation(self.collection, job_id, to_json_value(changes))

    def delete_operation(self, job_id: str) -> DeleteOperation:
        return DeleteOperation(self.collection, job_id)

    def status_precondition(self, job_id: str, status: JobStatus) -> Precondition:
        """Require the job to still be in ``status`` when the transaction commits."""
        return Precondition(self.collection, job_id, "status", status.value)

    def _decode(self, record: Dict[str, Any]) -> Job:
        return decode(JobDocument, self.collection, record)
