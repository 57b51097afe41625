"""
Document store implementations package.
"""

from .memory_store import InMemoryDocumentStore

__all__ = [
    "InMemoryDocumentStore",
]
