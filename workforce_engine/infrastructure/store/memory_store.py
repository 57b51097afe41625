"""
In-process document store.

Keeps records in dictionaries guarded by a single ``asyncio.Lock``. Used for
tests and for running the engine without a database.
"""

import asyncio
import copy
import operator
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from workforce_engine.application.interfaces.store import (
    DeleteOperation,
    DocumentStoreInterface,
    OrderBy,
    Precondition,
    Predicate,
    PutOperation,
    Record,
    UpdateOperation,
    WriteOperation,
)
from workforce_engine.config.logging import get_logger
from workforce_engine.domain.exceptions.store_error import (
    DocumentNotFoundError,
    StoreError,
    TransactionConflictError,
)

logger = get_logger(__name__)

_COMPARATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def matches(record: Record, predicate: Predicate) -> bool:
    """Evaluate a predicate against a record. Missing fields never match ranges."""
    value = record.get(predicate.field)
    if predicate.op == "==":
        return value == predicate.value
    if predicate.op == "!=":
        return value is not None and value != predicate.value
    if predicate.op == "in":
        return value in predicate.value
    if value is None:
        return False
    try:
        return _COMPARATORS[predicate.op](value, predicate.value)
    except TypeError:
        return False


class InMemoryDocumentStore(DocumentStoreInterface):
    """Dictionary-backed document store."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Record]] = defaultdict(dict)
        self._lock = asyncio.Lock()

    async def get(self, collection: str, document_id: str) -> Optional[Record]:
        async with self._lock:
            record = self._collections[collection].get(document_id)
            return copy.deepcopy(record) if record is not None else None

    async def put(self, collection: str, document_id: str, record: Record) -> None:
        async with self._lock:
            self._collections[collection][document_id] = self._stamp(document_id, record)

    async def update(self, collection: str, document_id: str, changes: Record) -> None:
        async with self._lock:
            self._apply_update(self._collections, collection, document_id, changes)

    async def delete(self, collection: str, document_id: str) -> bool:
        async with self._lock:
            return self._collections[collection].pop(document_id, None) is not None

    async def query(
        self,
        collection: str,
        predicates: Sequence[Predicate] = (),
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
        after_id: Optional[str] = None,
    ) -> List[Record]:
        async with self._lock:
            documents = self._collections[collection]
            results = [
                record
                for record in documents.values()
                if all(matches(record, predicate) for predicate in predicates)
            ]
            if order_by is not None:
                results = [r for r in results if r.get(order_by.field) is not None]

            descending = order_by.descending if order_by else False
            try:
                results.sort(key=lambda r: self._sort_key(r, order_by), reverse=descending)
            except TypeError as e:
                raise StoreError(
                    f"Cannot order {collection} by {order_by.field}: mixed value types"
                ) from e

            if after_id is not None:
                cursor = documents.get(after_id)
                cursor_key = self._sort_key(cursor, order_by) if cursor else None
                if cursor_key is not None and cursor_key[0] is not None:
                    compare = operator.lt if descending else operator.gt
                    results = [
                        r for r in results if compare(self._sort_key(r, order_by), cursor_key)
                    ]

            if limit is not None:
                results = results[:limit]

            return copy.deepcopy(results)

    async def transaction(self, operations: Sequence[WriteOperation]) -> None:
        async with self._lock:
            # Stage writes on a copy so a failure leaves nothing applied
            staged = defaultdict(
                dict,
                {name: dict(documents) for name, documents in self._collections.items()},
            )
            for op in operations:
                if isinstance(op, Precondition):
                    current = staged[op.collection].get(op.document_id)
                    if current is None or current.get(op.field) != op.expected:
                        logger.info(
                            "Transaction precondition failed",
                            collection=op.collection,
                            document_id=op.document_id,
                            field=op.field,
                            expected=op.expected,
                        )
                        raise TransactionConflictError(
                            op.collection, op.document_id, op.field
                        )
                elif isinstance(op, PutOperation):
                    staged[op.collection][op.document_id] = self._stamp(
                        op.document_id, op.record
                    )
                elif isinstance(op, UpdateOperation):
                    self._apply_update(staged, op.collection, op.document_id, op.changes)
                elif isinstance(op, DeleteOperation):
                    staged[op.collection].pop(op.document_id, None)
                else:
                    raise StoreError(f"Unsupported write operation: {op!r}")

            self._collections = staged

    @staticmethod
    def _stamp(document_id: str, record: Record) -> Record:
        stored = copy.deepcopy(record)
        stored["id"] = document_id
        return stored

    @staticmethod
    def _apply_update(
        collections: Dict[str, Dict[str, Record]],
        collection: str,
        document_id: str,
        changes: Record,
    ) -> None:
        current = collections[collection].get(document_id)
        if current is None:
            raise DocumentNotFoundError(collection, document_id)
        merged = {**current, **copy.deepcopy(changes)}
        merged["id"] = document_id
        collections[collection][document_id] = merged

    @staticmethod
    def _sort_key(record: Record, order_by: Optional[OrderBy]) -> Tuple[Any, str]:
        if order_by is None:
            return (record["id"], record["id"])
        return (record.get(order_by.field), record["id"])
