from __future__ import annotations
from dataclasses import dataclass
from ..domain.ports import CollectionPort, Condition
from .port_call import call_port


@dataclass
class CountObjects:
    port: CollectionPort

    async def execute(self, collection: str, where: Condition) -> int:
        return int(await call_port("COUNT_FAILED", self.port.count, collection, dict(where)))
