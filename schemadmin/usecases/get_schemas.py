from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..domain.entities import SchemaDefinition
from ..domain.ports import SessionPort, UseCaseError
from .port_call import call_port


@dataclass
class GetSchemas:
    port: SessionPort

    async def execute(self) -> List[SchemaDefinition]:
        payload = await call_port("SCHEMAS_FAILED", self.port.schemas)
        try:
            return [SchemaDefinition.from_payload(item) for item in payload]
        except ValueError as e:
            raise UseCaseError("SCHEMAS_FAILED", str(e))
