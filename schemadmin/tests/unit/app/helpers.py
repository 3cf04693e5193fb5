from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from unittest.mock import AsyncMock, Mock

from schemadmin.app.base_page import BasePage
from schemadmin.app.debounce_scheduler import DebounceScheduler
from schemadmin.domain.entities import SchemaRegistry
from schemadmin.domain.ports import ConfirmRequest, Decision, Severity


class DialogRecorder:
    """Answers confirmations from a script (default: confirm everything)."""

    def __init__(self, answers: Sequence[bool] = ()) -> None:
        self.answers = list(answers)
        self.requests: List[ConfirmRequest] = []

    async def confirm(self, request: ConfirmRequest) -> Decision:
        self.requests.append(request)
        answer = self.answers.pop(0) if self.answers else True
        return Decision.CONFIRMED if answer else Decision.CANCELLED

    @property
    def errors(self) -> List[str]:
        return [r.message for r in self.requests if r.cancel_label is None]


class ToastRecorder:
    def __init__(self) -> None:
        self.messages: List[Tuple[str, Severity]] = []

    def show(self, message: str, severity: Severity) -> None:
        self.messages.append((message, severity))


class NavigatorRecorder:
    def __init__(self) -> None:
        self.paths: List[str] = []
        self.guards: List[bool] = []

    def navigate(self, path: str) -> None:
        self.paths.append(path)

    def guard_unload(self, enabled: bool) -> None:
        self.guards.append(enabled)


def make_page(answers: Sequence[bool] = ()) -> BasePage:
    return BasePage(dialogs=DialogRecorder(answers), toasts=ToastRecorder(), navigator=NavigatorRecorder())


class ManualTimers:
    """Timer double for ``DebounceScheduler``: callbacks run only on ``fire``."""

    def __init__(self) -> None:
        self._next = 0
        self.pending: Dict[int, Tuple[int, Callable[[], None]]] = {}
        self.cancelled: List[int] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._next += 1
        self.pending[self._next] = (delay_ms, callback)
        return self._next

    def cancel(self, token: int) -> None:
        self.cancelled.append(token)
        self.pending.pop(token, None)

    def fire_all(self) -> int:
        fired = 0
        for token in list(self.pending):
            _, callback = self.pending.pop(token)
            callback()
            fired += 1
        return fired

    def scheduler(self) -> DebounceScheduler:
        return DebounceScheduler(self.schedule, self.cancel)


class FindRecorder:
    """Find use case double; an optional gate keeps calls suspended."""

    def __init__(self, pages: Sequence[List[Dict[str, Any]]] = (), gate: Optional[asyncio.Event] = None) -> None:
        self.pages = list(pages)
        self.gate = gate
        self.calls: List[Tuple[str, Any]] = []

    async def execute(self, collection: str, query: Any) -> List[Dict[str, Any]]:
        self.calls.append((collection, query))
        if self.gate is not None:
            await self.gate.wait()
        return self.pages.pop(0) if self.pages else []


def use_case(**kwargs: Any) -> Mock:
    """Use-case double: ``execute`` is an ``AsyncMock`` built from ``kwargs``."""
    return Mock(execute=AsyncMock(**kwargs))


def rows(*ids: str) -> List[Dict[str, Any]]:
    return [{"id": i, "title": f"Row {i}"} for i in ids]


def article_registry() -> SchemaRegistry:
    return SchemaRegistry.from_payload(
        [
            {
                "collection": "articles",
                "label": "Articles",
                "fields": {"title": {"type": "String"}, "views": {"type": "Number"}},
            },
            {
                "collection": "products",
                "fields": {
                    "name": {"type": "String", "required": True, "maxLength": 20},
                    "price": {"type": "Number", "min": 0},
                },
            },
        ]
    )


def run(coro):
    return asyncio.run(coro)


__all__ = [
    "DialogRecorder",
    "FindRecorder",
    "ManualTimers",
    "NavigatorRecorder",
    "ToastRecorder",
    "article_registry",
    "make_page",
    "rows",
    "run",
    "use_case",
]
