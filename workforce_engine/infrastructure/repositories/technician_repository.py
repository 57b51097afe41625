"""Technician repository implementation."""

from typing import Optional

from workforce_engine.application.interfaces.store import DocumentStoreInterface
from workforce_engine.config.settings import settings
from workforce_engine.domain.entities.technician import Technician

from .documents import TechnicianDocument, decode, encode


class TechnicianRepository:
    """Typed access to technician user records."""

    def __init__(self, store: DocumentStoreInterface, collection: Optional[str] = None):
        self.store = store
        self.collection = collection or settings.TECHNICIANS_COLLECTION

    async def get_by_id(self, technician_id: str) -> Optional[Technician]:
        """Get technician by ID."""
        record = await self.store.get(self.collection, technician_id)
        if record is None:
            return None
        return decode(TechnicianDocument, self.collection, record)

    async def save(self, technician: Technician) -> Technician:
        """Create or overwrite a technician record."""
        await self.store.put(
            self.collection,
            technician.id,
            encode(TechnicianDocument.from_entity(technician)),
        )
        return technician
