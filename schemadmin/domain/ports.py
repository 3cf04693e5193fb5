from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol

Record = Dict[str, Any]
ObjectId = str
Condition = Dict[str, Any]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Dialog/toast vocabulary ----
class Severity(str, Enum):
    """Visual weight of a dialog or toast."""

    DEFAULT = "default"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    DANGER = "danger"


class Decision(str, Enum):
    """Outcome of a confirmation request."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ConfirmRequest:
    """Everything a dialog implementation needs to ask the user one question.

    ``cancel_label`` set to ``None`` means acknowledgement only (error dialogs).
    """

    message: str
    title: str = "Confirm"
    confirm_label: str = "OK"
    cancel_label: Optional[str] = "Cancel"
    severity: Severity = Severity.DEFAULT


# ---- Ports (Hexagonal boundaries) ----
class CollectionPort(Protocol):
    """Blocking data access against a collection backend."""

    def find(self, collection: str, query: Mapping[str, Any]) -> List[Record]: ...
    def count(self, collection: str, where: Condition) -> int: ...
    def get(self, collection: str, object_id: ObjectId) -> Record: ...
    def upsert(self, collection: str, obj: Record) -> Record: ...
    def delete(self, collection: str, object_id: ObjectId) -> None: ...


class SessionPort(Protocol):
    """Session and schema bootstrap calls."""

    def current_user(self) -> Record: ...
    def sign_out(self) -> None: ...
    def schemas(self) -> List[Record]: ...


class DialogPort(Protocol):
    """Opens one modal per call and resolves with the user's decision."""

    async def confirm(self, request: ConfirmRequest) -> Decision: ...


class ToastPort(Protocol):
    """Fire-and-forget auto-dismissing notifications."""

    def show(self, message: str, severity: Severity) -> None: ...


class NavigatorPort(Protocol):
    """Route changes and the window-level leave warning."""

    def navigate(self, path: str) -> None: ...
    def guard_unload(self, enabled: bool) -> None: ...
