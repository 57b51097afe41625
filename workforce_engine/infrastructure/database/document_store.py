"""
SQLAlchemy document store.

Stores every record as a JSON column in a single ``documents`` table. Queries
compare JSON fields as text (or as numbers/booleans when the predicate value
is one), which is why timestamps are stored as fixed-width UTC strings.
"""

from typing import Any, List, Optional, Sequence

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

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

from .models import Base, DocumentModel

logger = get_logger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the documents table if it does not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def _field(name: str, sample: Any):
    """JSON field accessor typed after the value it is compared with."""
    element = DocumentModel.data[name]
    if isinstance(sample, bool):
        return element.as_boolean()
    if isinstance(sample, (int, float)):
        return element.as_float()
    return element.as_string()


def _predicate_clause(predicate: Predicate):
    if predicate.op == "in":
        values = list(predicate.value)
        column = _field(predicate.field, values[0] if values else "")
        return column.in_(values)

    column = _field(predicate.field, predicate.value)
    if predicate.value is None:
        if predicate.op == "==":
            return column.is_(None)
        if predicate.op == "!=":
            return column.isnot(None)
        raise StoreError(f"Cannot range-compare {predicate.field} with null")

    if predicate.op == "==":
        return column == predicate.value
    if predicate.op == "!=":
        return and_(column.isnot(None), column != predicate.value)
    if predicate.op == "<":
        return column < predicate.value
    if predicate.op == "<=":
        return column <= predicate.value
    if predicate.op == ">":
        return column > predicate.value
    return column >= predicate.value


class SqlAlchemyDocumentStore(DocumentStoreInterface):
    """Document store over a relational database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def get(self, collection: str, document_id: str) -> Optional[Record]:
        try:
            async with self.session_factory() as session:
                model = await session.get(DocumentModel, (collection, document_id))
                return self._to_record(model) if model else None
        except SQLAlchemyError as e:
            logger.error(
                "Failed to read document",
                collection=collection,
                document_id=document_id,
                error=str(e),
            )
            raise StoreError(f"Failed to read {collection}/{document_id}") from e

    async def put(self, collection: str, document_id: str, record: Record) -> None:
        await self.transaction([PutOperation(collection, document_id, record)])

    async def update(self, collection: str, document_id: str, changes: Record) -> None:
        await self.transaction([UpdateOperation(collection, document_id, changes)])

    async def delete(self, collection: str, document_id: str) -> bool:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(DocumentModel).where(
                            DocumentModel.collection == collection,
                            DocumentModel.id == document_id,
                        )
                    )
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error(
                "Failed to delete document",
                collection=collection,
                document_id=document_id,
                error=str(e),
            )
            raise StoreError(f"Failed to delete {collection}/{document_id}") from e

    async def query(
        self,
        collection: str,
        predicates: Sequence[Predicate] = (),
        order_by: Optional[OrderBy] = None,
        limit: Optional[int] = None,
        after_id: Optional[str] = None,
    ) -> List[Record]:
        try:
            async with self.session_factory() as session:
                stmt = select(DocumentModel).where(DocumentModel.collection == collection)
                for predicate in predicates:
                    stmt = stmt.where(_predicate_clause(predicate))

                descending = order_by.descending if order_by else False
                sort_column = (
                    DocumentModel.data[order_by.field].as_string() if order_by else None
                )
                if sort_column is not None:
                    stmt = stmt.where(sort_column.isnot(None))

                if after_id is not None:
                    stmt = await self._position_after(
                        session, stmt, collection, after_id, sort_column, order_by, descending
                    )

                if sort_column is not None:
                    stmt = stmt.order_by(
                        sort_column.desc() if descending else sort_column.asc(),
                        DocumentModel.id.desc() if descending else DocumentModel.id.asc(),
                    )
                else:
                    stmt = stmt.order_by(DocumentModel.id.asc())

                if limit is not None:
                    stmt = stmt.limit(limit)

                result = await session.execute(stmt)
                return [self._to_record(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Failed to query documents", collection=collection, error=str(e))
            raise StoreError(f"Failed to query {collection}") from e

    async def transaction(self, operations: Sequence[WriteOperation]) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    for op in operations:
                        await self._apply(session, op)
        except StaleDataError as e:
            # Another writer committed between our read and our write
            logger.info("Transaction lost a concurrent write race", error=str(e))
            first = next(iter(operations))
            raise TransactionConflictError(
                first.collection, first.document_id, "version"
            ) from e
        except SQLAlchemyError as e:
            logger.error("Transaction failed", operations=len(operations), error=str(e))
            raise StoreError("Failed to commit transaction") from e

    async def _apply(self, session: AsyncSession, op: WriteOperation) -> None:
        if isinstance(op, Precondition):
            model = await session.get(
                DocumentModel, (op.collection, op.document_id), with_for_update=True
            )
            if model is None or model.data.get(op.field) != op.expected:
                logger.info(
                    "Transaction precondition failed",
                    collection=op.collection,
                    document_id=op.document_id,
                    field=op.field,
                    expected=op.expected,
                )
                raise TransactionConflictError(op.collection, op.document_id, op.field)
        elif isinstance(op, PutOperation):
            model = await session.get(DocumentModel, (op.collection, op.document_id))
            data = {**op.record, "id": op.document_id}
            if model is None:
                session.add(
                    DocumentModel(collection=op.collection, id=op.document_id, data=data)
                )
            else:
                model.data = data
        elif isinstance(op, UpdateOperation):
            model = await session.get(DocumentModel, (op.collection, op.document_id))
            if model is None:
                raise DocumentNotFoundError(op.collection, op.document_id)
            model.data = {**model.data, **op.changes, "id": op.document_id}
        elif isinstance(op, DeleteOperation):
            model = await session.get(DocumentModel, (op.collection, op.document_id))
            if model is not None:
                await session.delete(model)
        else:
            raise StoreError(f"Unsupported write operation: {op!r}")
        await session.flush()

    async def _position_after(
        self, session, stmt, collection, after_id, sort_column, order_by, descending
    ):
        cursor = await session.get(DocumentModel, (collection, after_id))
        if cursor is None:
            # Cursor document is gone: restart from the top
            return stmt

        if sort_column is None:
            return stmt.where(DocumentModel.id > after_id)

        cursor_value = cursor.data.get(order_by.field)
        if cursor_value is None:
            return stmt
        cursor_value = str(cursor_value)
        if descending:
            return stmt.where(
                or_(
                    sort_column < cursor_value,
                    and_(sort_column == cursor_value, DocumentModel.id < after_id),
                )
            )
        return stmt.where(
            or_(
                sort_column > cursor_value,
                and_(sort_column == cursor_value, DocumentModel.id > after_id),
            )
        )

    @staticmethod
    def _to_record(model: DocumentModel) -> Record:
        return {**model.data, "id": model.id}
