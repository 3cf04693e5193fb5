from __future__ import annotations
from dataclasses import dataclass
from ..domain.ports import CollectionPort, ObjectId, Record
from .port_call import call_port


@dataclass
class GetObject:
    port: CollectionPort

    async def execute(self, collection: str, object_id: ObjectId) -> Record:
        return dict(await call_port("GET_FAILED", self.port.get, collection, object_id))
