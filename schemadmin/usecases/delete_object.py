from __future__ import annotations
from dataclasses import dataclass
from ..domain.ports import CollectionPort, ObjectId
from .port_call import call_port


@dataclass
class DeleteObject:
    port: CollectionPort

    async def execute(self, collection: str, object_id: ObjectId) -> None:
        await call_port("DELETE_FAILED", self.port.delete, collection, object_id)
