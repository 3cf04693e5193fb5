from __future__ import annotations
from dataclasses import dataclass
from ..domain.ports import SessionPort
from .port_call import call_port


@dataclass
class SignOut:
    port: SessionPort

    async def execute(self) -> None:
        await call_port("SIGN_OUT_FAILED", self.port.sign_out)
