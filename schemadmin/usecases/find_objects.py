from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..domain.entities import CollectionQuery
from ..domain.ports import CollectionPort, Record
from .port_call import call_port


@dataclass
class FindObjects:
    port: CollectionPort

    async def execute(self, collection: str, query: CollectionQuery) -> List[Record]:
        rows = await call_port("FIND_FAILED", self.port.find, collection, query.to_dict())
        return list(rows)
