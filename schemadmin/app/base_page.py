"""Cross-cutting page coordination shared by every presenter.

``BasePage`` owns the page-level loading gate and the inline-loading keys, and
routes confirmations, error dialogs, toasts and navigation to the UI ports it
was constructed with. Presenters never talk to the UI toolkit directly.
"""

from __future__ import annotations


import logging
from typing import Any, Optional, Set

from schemadmin.domain.ports import (
    ConfirmRequest,
    Decision,
    DialogPort,
    NavigatorPort,
    Severity,
    ToastPort,
    UseCaseError,
)

DEFAULT_ERROR_MESSAGE = "An error occurred"


def error_message(error: Any) -> str:
    """Normalize a string, UseCaseError or exception into dialog text."""
    if isinstance(error, str):
        return error.strip() or DEFAULT_ERROR_MESSAGE
    if isinstance(error, UseCaseError):
        return error.message or DEFAULT_ERROR_MESSAGE
    message = getattr(error, "message", None)
    if isinstance(message, str) and message.strip():
        return message.strip()
    text = str(error) if error is not None else ""
    return text.strip() or DEFAULT_ERROR_MESSAGE


class BasePage:
    """UI-coordination primitives for one mounted page."""

    def __init__(self, *, dialogs: DialogPort, toasts: ToastPort, navigator: NavigatorPort) -> None:
        self._log = logging.getLogger(__name__)
        self.dialogs = dialogs
        self.toasts = toasts
        self.navigator = navigator
        self.loading: bool = False
        self._inline: Set[str] = set()

    # ------------------------------------------------------------------
    # Loading flags
    # ------------------------------------------------------------------
    def set_loading(self, value: bool) -> None:
        self.loading = bool(value)

    def show_inline_loading(self, key: str) -> None:
        self._inline.add(key)

    def hide_inline_loading(self, key: str) -> None:
        self._inline.discard(key)

    def is_inline_loading(self, key: str) -> bool:
        return key in self._inline

    # ------------------------------------------------------------------
    # Dialogs and toasts
    # ------------------------------------------------------------------
    async def request_confirmation(self, request: ConfirmRequest) -> Decision:
        """Suspend until the user answers; every call opens its own modal."""
        decision = await self.dialogs.confirm(request)
        return Decision.CONFIRMED if decision == Decision.CONFIRMED else Decision.CANCELLED

    async def show_confirm_dialog(
        self,
        message: str,
        title: str = "Confirm",
        confirm_label: str = "OK",
        cancel_label: Optional[str] = "Cancel",
        severity: Severity = Severity.DEFAULT,
    ) -> bool:
        decision = await self.request_confirmation(
            ConfirmRequest(
                message=message,
                title=title,
                confirm_label=confirm_label,
                cancel_label=cancel_label,
                severity=severity,
            )
        )
        return decision == Decision.CONFIRMED

    async def show_error(self, error: Any, title: str = "Error") -> None:
        """Blocking acknowledgement-only dialog; returns once acknowledged."""
        message = error_message(error)
        self._log.debug("Showing error dialog: %s", message)
        await self.show_confirm_dialog(message, title, "OK", None, Severity.DANGER)

    def show_toast(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.toasts.show(message, severity)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def navigate(self, path: str) -> None:
        self.navigator.navigate(path)

    def guard_unload(self, enabled: bool) -> None:
        self.navigator.guard_unload(enabled)


__all__ = ["BasePage", "DEFAULT_ERROR_MESSAGE", "error_message"]
