"""
Application interfaces package.
"""

from .store import (
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

__all__ = [
    "DocumentStoreInterface",
    "Record",
    "Predicate",
    "OrderBy",
    "PutOperation",
    "UpdateOperation",
    "DeleteOperation",
    "Precondition",
    "WriteOperation",
]
