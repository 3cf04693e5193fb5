"""NiceGUI implementation of the dialog, toast and navigation ports.

Must be used from inside a NiceGUI page context (a connected client), the
same place the presenters are created for a browser tab.
"""

from __future__ import annotations

from typing import Dict

from nicegui import ui

from schemadmin.domain.ports import (
    ConfirmRequest,
    Decision,
    DialogPort,
    NavigatorPort,
    Severity,
    ToastPort,
)

_NOTIFY_TYPES: Dict[Severity, str] = {
    Severity.DEFAULT: "info",
    Severity.INFO: "info",
    Severity.SUCCESS: "positive",
    Severity.WARNING: "warning",
    Severity.ERROR: "negative",
    Severity.DANGER: "negative",
}

_BUTTON_COLORS: Dict[Severity, str] = {
    Severity.DANGER: "negative",
    Severity.ERROR: "negative",
    Severity.WARNING: "warning",
}

_UNLOAD_ON = "window.onbeforeunload = (e) => { e.preventDefault(); e.returnValue = ''; return ''; };"
_UNLOAD_OFF = "window.onbeforeunload = null;"


def notify_type_for(severity: Severity) -> str:
    """Map a severity onto the ``type`` understood by ``ui.notify``."""
    return _NOTIFY_TYPES.get(Severity(severity), "info")


class NiceGuiPage(DialogPort, ToastPort, NavigatorPort):
    """Opens one ``ui.dialog`` per confirmation and awaits its result."""

    async def confirm(self, request: ConfirmRequest) -> Decision:
        color = _BUTTON_COLORS.get(request.severity, "primary")
        with ui.dialog() as dialog, ui.card():
            ui.label(request.title).classes("text-lg font-medium")
            ui.label(request.message)
            with ui.row().classes("w-full justify-end"):
                if request.cancel_label:
                    ui.button(request.cancel_label, on_click=lambda: dialog.submit(False)).props("flat")
                ui.button(request.confirm_label, on_click=lambda: dialog.submit(True)).props(f"color={color}")
        # Closing via backdrop or escape resolves to None.
        result = await dialog
        dialog.delete()
        return Decision.CONFIRMED if result is True else Decision.CANCELLED

    def show(self, message: str, severity: Severity) -> None:
        ui.notify(message, type=notify_type_for(severity))

    def navigate(self, path: str) -> None:
        ui.navigate.to(path)

    def guard_unload(self, enabled: bool) -> None:
        ui.run_javascript(_UNLOAD_ON if enabled else _UNLOAD_OFF)


__all__ = ["NiceGuiPage", "notify_type_for"]
