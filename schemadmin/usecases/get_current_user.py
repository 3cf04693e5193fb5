from __future__ import annotations
from dataclasses import dataclass
from ..domain.entities import CurrentUser
from ..domain.ports import SessionPort
from .port_call import call_port


@dataclass
class GetCurrentUser:
    port: SessionPort

    async def execute(self) -> CurrentUser:
        payload = await call_port("CURRENT_USER_FAILED", self.port.current_user)
        return CurrentUser.from_payload(payload)
