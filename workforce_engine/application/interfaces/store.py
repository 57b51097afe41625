"""
Document store interface for dependency inversion.

The engine owns no persistence format: every read and write goes through an
implementation of ``DocumentStoreInterface``. Records are JSON-native
dictionaries keyed by ``(collection, id)``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

Record = Dict[str, Any]

PREDICATE_OPERATORS = ("==", "!=", "in", "<", "<=", ">", ">=")


@dataclass(frozen=True)
class Predicate:
    """A filter the store applies to a top-level record field."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in PREDICATE_OPERATORS:
            raise ValueError(f"Unsupported predicate operator '{self.op}'")
        if self.op == "in" and not isinstance(self.value, (list, tuple, set, frozenset)):
            raise ValueError("Operator 'in' requires a collection value")


@dataclass(frozen=True)
class OrderBy:
    """Sort order of a query. Ties are broken by document id."""

    field: str
    descending: bool = False


@dataclass(frozen=True)
class PutOperation:
    """Create or overwrite a whole document."""

    collection: str
    document_id: str
    record: Record


@dataclass(frozen=True)
class UpdateOperation:
    """Shallow-merge fields into an existing document."""

    collection: str
    document_id: str
    changes: Record


@dataclass(frozen=True)
class DeleteOperation:
    """Remove a document."""

    collection: str
    document_id: str


@dataclass(frozen=True)
class Precondition:
    """Require ``record[field] == expected`` at commit time."""

    collection: str
    document_id: str
    field: str
    expected: Any


WriteOperation = Union[PutOperation, UpdateOperation, DeleteOperation, Precondition]


class DocumentStoreInterface(ABC):
    """Document store interface."""

    @abstractmethod
    async def get(self, collection: str, document_id: str) -> Optional[Record]:
        """Get a document by ID, or None if absent."""
        pass

    @abstractmethod
    async def put(self, collection: str, document_id: str, record: Record) -> None:
        """Create or overwrite a document."""
        pass

    @abstractmethod
    async def update(self, collection: str, document_id: str, changes: Record) -> None:
        """Shallow-merge ``changes`` into an existing document.

        Raises:
            DocumentNotFoundError: if the document does not exist
        """
        pass

    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def query(
        self,
        collection: str,
        predicates: Sequence[Predicate] = (),
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
        after_id: Optional[str] = None,
    ) -> List[Record]:
        """
        Query documents.

        Args:
            collection: Collection to read
            predicates: Filters, all of which must hold
            order_by: Sort order; documents lacking the field are excluded
            limit: Maximum number of documents to return
            after_id: Start strictly after this document's sort position.
                Ignored when the document no longer exists.

        Returns:
            Matching records, each including its ``id``
        """
        pass

    @abstractmethod
    async def transaction(self, operations: Sequence[WriteOperation]) -> None:
        """
        Apply writes atomically, all or nothing.

        Raises:
            TransactionConflictError: if a precondition does not hold
            DocumentNotFoundError: if an update targets a missing document
        """
        pass
