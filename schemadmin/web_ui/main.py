"""NiceGUI entrypoint for the schema-driven admin UI."""

from __future__ import annotations

import argparse
import os
from typing import Any, Callable, Dict

from nicegui import ui

from schemadmin.adapters.nicegui_page import NiceGuiPage
from schemadmin.app.base_page import BasePage
from schemadmin.app.bootstrap import bootstrap
from schemadmin.app.controller import AppController
from schemadmin.app.form_presenter import FormPresenter
from schemadmin.app.list_presenter import DELETE_KEY, ListPresenter
from schemadmin.domain.entities import ID_FIELD, NEW_OBJECT_ID, SchemaDefinition, form_path, list_path
from schemadmin.domain.field_kinds import DEFAULT_KINDS


def _new_page() -> BasePage:
    ports = NiceGuiPage()
    return BasePage(dialogs=ports, toasts=ports, navigator=ports)


def _cell(value: Any) -> str:
    if isinstance(value, dict) and "iso" in value:
        return str(value["iso"])
    return "" if value is None else str(value)


def _columns(schema: SchemaDefinition | None, rows: list) -> list:
    names = list(schema.fields) if schema else sorted({k for row in rows for k in row if k != ID_FIELD})
    return [ID_FIELD, *names]


def _render_field(name: str, type_name: str, value: Any, on_change: Callable[[Any], None]) -> None:
    """Pick a widget from the field kind's render hint; unknown kinds get a text input."""
    kind = DEFAULT_KINDS.kind_for(type_name)
    hint = kind.render_hint if kind else "text"
    if hint == "checkbox":
        ui.checkbox(name, value=bool(value), on_change=lambda e: on_change(bool(e.value)))
    elif hint == "number":
        ui.number(name, value=value, on_change=lambda e: on_change(e.value)).props("dense outlined")
    elif hint == "date":
        ui.input(name, value=_cell(value), on_change=lambda e: on_change(e.value)).props("dense outlined type=date")
    else:
        ui.input(name, value=_cell(value), on_change=lambda e: on_change(e.value)).props("dense outlined").classes("w-96")


def _build_ui(controller: AppController) -> None:
    """Register the NiceGUI pages."""

    async def _start_shell() -> bool:
        main = controller.main_presenter(_new_page())
        await main.initialize()
        return main.state.user is not None

    @ui.page("/")
    async def index() -> None:
        await ui.context.client.connected()
        if not await _start_shell():
            return
        with ui.column().classes("q-pa-md"):
            ui.label("Collections").classes("text-h5")
            for schema in controller.schemas:
                ui.link(schema.label, list_path(schema.collection))

    @ui.page("/collections/{collection}")
    async def collection_list(collection: str) -> None:
        await ui.context.client.connected()
        if not await _start_shell():
            return
        presenter: ListPresenter = controller.list_presenter(_new_page())
        ui.context.client.on_disconnect(presenter.dispose)

        @ui.refreshable
        def render_rows() -> None:
            state = presenter.state
            schema = controller.schemas.get(collection)
            columns = _columns(schema, state.objects)
            with ui.column().classes("w-full"):
                for row in state.objects:
                    object_id = row.get(ID_FIELD)
                    with ui.row().classes("items-center q-gutter-sm"):
                        ui.checkbox(
                            value=state.is_selected(object_id),
                            on_change=lambda _, i=object_id: presenter.toggle_selection(i),
                        )
                        for name in columns:
                            ui.label(_cell(row.get(name))).classes("w-40")
                        ui.button(icon="edit", on_click=lambda _, i=object_id: ui.navigate.to(form_path(collection, i))).props("flat dense")
                        ui.button(icon="delete", on_click=lambda _, i=object_id: presenter.handle_delete(i)).props("flat dense color=negative")
                ui.label(f"{len(state.objects)} of {state.count}").classes("text-caption")
                if presenter.has_more:
                    ui.button("Load more", on_click=presenter.load_more).props("flat")
                if presenter.page.is_inline_loading(DELETE_KEY):
                    ui.spinner()

        with ui.column().classes("w-full q-pa-md"):
            with ui.row().classes("w-full items-center q-gutter-sm"):
                ui.label(collection).classes("text-h5")
                ui.input("Search", on_change=lambda e: presenter.handle_search_change(str(e.value or ""))).props("dense outlined clearable")
                ui.button("Select all", on_click=presenter.select_all).props("flat")
                ui.button("Clear selection", on_click=presenter.deselect_all).props("flat")
                ui.button("Delete selected", on_click=presenter.delete_selected, color="negative")
                ui.button("New", on_click=lambda: ui.navigate.to(form_path(collection, NEW_OBJECT_ID)), color="primary")
            render_rows()

        await presenter.initialize(collection)
        ui.timer(0.5, render_rows.refresh)

    @ui.page("/collections/{collection}/form/{object_id}")
    async def collection_form(collection: str, object_id: str) -> None:
        await ui.context.client.connected()
        if not await _start_shell():
            return
        presenter: FormPresenter = controller.form_presenter(_new_page())
        ui.context.client.on_disconnect(presenter.dispose)
        await presenter.initialize(collection, object_id)
        schema = controller.schemas.get(collection)

        def setter(name: str) -> Callable[[Any], None]:
            return lambda value: presenter.handle_field_change(name, value)

        @ui.refreshable
        def render_errors() -> None:
            for name, message in presenter.state.errors.items():
                ui.label(f"{name}: {message}").classes("text-negative")

        with ui.column().classes("q-pa-md q-gutter-sm"):
            title = "New object" if presenter.state.is_new else f"{collection} / {object_id}"
            ui.label(title).classes("text-h5")
            fields: Dict[str, str] = {n: s.type for n, s in schema.fields.items()} if schema else {}
            for name, type_name in fields.items():
                _render_field(name, type_name, presenter.state.object.get(name), setter(name))
            render_errors()
            with ui.row().classes("q-gutter-sm"):
                ui.button("Save", on_click=presenter.handle_submit, color="primary")
                ui.button("Cancel", on_click=presenter.handle_cancel).props("flat")

        ui.timer(0.5, render_errors.refresh)

    @ui.page("/signin")
    def signin() -> None:
        ui.label("Your session has ended. Update the session token in user_settings.json and reload.")

    @ui.page("/denied")
    def denied() -> None:
        ui.label("Your account has no roles with access to this admin.")


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the schemadmin NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--settings-dir", default=".")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    controller = bootstrap(args.settings_dir)
    if args.smoke_test:
        print("web-smoke-ok", controller.settings_vm.api_base_url or "<unset>")
        return
    if not controller.ensure_ready():
        raise SystemExit("Set api_base_url in user_settings.json before starting the web UI.")
    _build_ui(controller)
    ui.run(
        host=args.host,
        port=args.port,
        title="Schema Admin",
        reload=args.reload,
        show=False,
        storage_secret=os.environ.get("SCHEMADMIN_WEB_STORAGE_SECRET", "schemadmin-web-ui-secret"),
    )


if __name__ == "__main__":
    main()
