from __future__ import annotations
from dataclasses import dataclass
from ..domain.ports import CollectionPort, Record, UseCaseError
from .port_call import call_port


@dataclass
class UpsertObject:
    """Create (no ``id``) or partially update (``id`` present) one record."""

    port: CollectionPort

    async def execute(self, collection: str, obj: Record) -> Record:
        saved = await call_port("UPSERT_FAILED", self.port.upsert, collection, dict(obj))
        if not isinstance(saved, dict):
            raise UseCaseError("UPSERT_FAILED", "Server returned no object.")
        return saved
