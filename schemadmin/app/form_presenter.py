"""Presenter for the generic create/edit form page.

Tracks field edits against the last loaded or saved snapshot, gates submit on
schema validation, and sends either the full object (create) or only the
edited fields plus ``id`` (update).
"""

from __future__ import annotations


import copy
import logging
from typing import Any, Optional

from schemadmin.domain.entities import (
    ID_FIELD,
    NEW_OBJECT_ID,
    SchemaRegistry,
    form_path,
    list_path,
)
from schemadmin.domain.ports import ObjectId, Record, Severity, UseCaseError
from schemadmin.domain.validation import ValidationResult, validate_form
from schemadmin.usecases.get_object import GetObject
from schemadmin.usecases.upsert_object import UpsertObject
from schemadmin.viewmodels.form_state import FormState

from .base_page import BasePage


class FormPresenter:
    """Owns ``FormState`` and its get/upsert collaborator calls."""

    def __init__(
        self,
        *,
        page: BasePage,
        schemas: SchemaRegistry,
        get_object: GetObject,
        upsert_object: UpsertObject,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.page = page
        self.schemas = schemas
        self.get_object = get_object
        self.upsert_object = upsert_object

        self.collection: str = ""
        self.state = FormState()
        self._owner = 0
        self._guarding = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def initialize(self, collection: str, object_id: ObjectId) -> None:
        """Seed a blank object for ``"new"``; otherwise load the record."""
        self._owner += 1
        owner = self._owner
        self.collection = collection
        self.state = FormState(object_id=object_id)
        self._sync_unload_guard()
        if object_id == NEW_OBJECT_ID:
            self.page.set_loading(False)
            return

        state = self.state
        state.loading = True
        self.page.set_loading(True)
        try:
            loaded = await self.get_object.execute(collection, object_id)
        except UseCaseError as exc:
            if owner != self._owner:
                return
            state.loading = False
            self.page.set_loading(False)
            self._log.warning("Loading %s/%s failed: %s", collection, object_id, exc.message)
            await self.page.show_error(exc)
            return
        if owner != self._owner:
            self._log.debug("Discarding stale load of %s/%s", collection, object_id)
            return
        state.object = dict(loaded)
        state.original = copy.deepcopy(state.object)
        state.loading = False
        self.page.set_loading(False)

    def dispose(self) -> None:
        self._owner += 1
        self._release_unload_guard()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def handle_field_change(self, field: str, value: Any) -> None:
        """Record an edit; ``dirty`` follows a structural diff with the snapshot."""
        self.state.change = {**self.state.change, field: value}
        self.state.object = {**self.state.object, field: value}
        self._recompute_dirty()

    def toggle_advanced(self) -> None:
        self.state.advanced = not self.state.advanced

    def validate_form(self) -> ValidationResult:
        return validate_form(self.state.object, self.schemas.get(self.collection))

    def _recompute_dirty(self) -> None:
        self.state.dirty = self.state.object != self.state.original
        self._sync_unload_guard()

    # ------------------------------------------------------------------
    # Submit / cancel
    # ------------------------------------------------------------------
    def submit_payload(self) -> Record:
        """Full object on create, ``{id, **change}`` on update."""
        if self.state.is_new:
            return {k: v for k, v in self.state.object.items() if k != ID_FIELD}
        return {ID_FIELD: self.state.object_id, **self.state.change}

    async def handle_submit(self) -> None:
        state = self.state
        if state.submitting:
            return
        validation = self.validate_form()
        state.errors = dict(validation.errors)
        if not validation.is_valid:
            self.page.show_toast("Please fix validation errors", Severity.ERROR)
            return

        owner, collection = self._owner, self.collection
        payload = self.submit_payload()
        sent_object = copy.deepcopy(state.object)
        sent_change = copy.deepcopy(state.change)
        state.submitting = True
        error: Optional[UseCaseError] = None
        saved: Record = {}
        try:
            saved = await self.upsert_object.execute(collection, payload)
        except UseCaseError as exc:
            error = exc
        finally:
            state.submitting = False

        if owner != self._owner:
            return
        if error is not None:
            self._log.warning("Saving %s failed: %s", collection, error.message)
            await self.page.show_error(error)
            return

        was_new = state.is_new
        # Edits made while the save was awaited were not sent; keep them pending.
        pending = {
            key: value
            for key, value in state.change.items()
            if key not in sent_change or sent_change[key] != value
        }
        state.original = {**sent_object, **saved}
        state.object = {**copy.deepcopy(state.original), **pending}
        state.change = pending
        self._recompute_dirty()
        self.page.show_toast("Data saved successfully", Severity.SUCCESS)
        if was_new:
            new_id = saved.get(ID_FIELD)
            if new_id is None:
                self._log.warning("Create in %s returned no %s", collection, ID_FIELD)
                return
            state.object_id = str(new_id)
            self.page.navigate(form_path(collection, state.object_id))

    async def handle_cancel(self) -> None:
        if self.state.dirty:
            confirmed = await self.page.show_confirm_dialog(
                "You have unsaved changes. Are you sure you want to leave?",
                "Unsaved Changes",
                "Leave",
                "Stay",
            )
            if not confirmed:
                return
        self._release_unload_guard()
        self.page.navigate(list_path(self.collection))

    # ------------------------------------------------------------------
    # Window-level leave warning
    # ------------------------------------------------------------------
    def _sync_unload_guard(self) -> None:
        if self.state.dirty != self._guarding:
            self._guarding = self.state.dirty
            self.page.guard_unload(self._guarding)

    def _release_unload_guard(self) -> None:
        if self._guarding:
            self._guarding = False
            self.page.guard_unload(False)


__all__ = ["FormPresenter"]
