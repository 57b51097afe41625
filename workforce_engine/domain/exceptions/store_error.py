"""
Document store exceptions.
"""

from .job_error import JobError


class StoreError(JobError):
    """Raised when the underlying document store call fails."""

    pass


class DocumentNotFoundError(StoreError):
    """Raised when a partial update targets a missing document."""

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(f"Document {collection}/{document_id} does not exist")


class TransactionConflictError(StoreError):
    """Raised when a transaction precondition no longer holds."""

    def __init__(self, collection: str, document_id: str, field: str):
        self.collection = collection
        self.document_id = document_id
        self.field = field
        super().__init__(
            f"Precondition on {collection}/{document_id}.{field} failed"
        )


class DocumentDecodeError(StoreError):
    """Raised when a stored record does not match the expected document shape."""

    def __init__(self, collection: str, document_id: str, detail: str):
        self.collection = collection
        self.document_id = document_id
        self.detail = detail
        super().__init__(
            f"Malformed document {collection}/{document_id}: {detail}"
        )
