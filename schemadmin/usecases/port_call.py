from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar

from .error_mapping import map_api_error

T = TypeVar("T")


async def call_port(default_code: str, fn: Callable[..., T], *args: Any) -> T:
    """Run a blocking port call off the event loop; failures become UseCaseError."""
    try:
        return await asyncio.to_thread(fn, *args)
    except Exception as exc:
        raise map_api_error(exc, default_code=default_code) from exc
