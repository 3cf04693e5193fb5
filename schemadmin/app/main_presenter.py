"""Presenter for the application shell: session check and schema bootstrap."""

from __future__ import annotations


import logging
from dataclasses import dataclass
from typing import Optional

from schemadmin.domain.entities import CurrentUser, SchemaRegistry
from schemadmin.domain.ports import UseCaseError
from schemadmin.usecases.get_current_user import GetCurrentUser
from schemadmin.usecases.get_schemas import GetSchemas
from schemadmin.usecases.sign_out import SignOut

from .base_page import BasePage

SIGN_IN_PATH = "/signin"
DENIED_PATH = "/denied"


@dataclass
class MainState:
    loading: bool = False
    user: Optional[CurrentUser] = None


class MainPresenter:
    """Loads the signed-in user and installs schemas into the shared registry."""

    def __init__(
        self,
        *,
        page: BasePage,
        schemas: SchemaRegistry,
        get_current_user: GetCurrentUser,
        sign_out: SignOut,
        get_schemas: GetSchemas,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.page = page
        self.schemas = schemas
        self.get_current_user = get_current_user
        self.sign_out_uc = sign_out
        self.get_schemas = get_schemas
        self.state = MainState()

    async def initialize(self) -> None:
        self._set_loading(True)
        try:
            user = await self.get_current_user.execute()
            if not user.has_access:
                self._log.info("User %s has no roles; signing out", user.username or user.id)
                await self.sign_out_uc.execute()
                self._set_loading(False)
                self.page.navigate(DENIED_PATH)
                return
            schemas = await self.get_schemas.execute()
        except UseCaseError as exc:
            self._set_loading(False)
            if exc.code == "AUTH_FAILED":
                self.page.navigate(SIGN_IN_PATH)
                return
            self._log.warning("Startup failed: %s", exc.message)
            await self.page.show_error(exc)
            return

        self.schemas.replace(schemas)
        self.state.user = user
        self._log.debug("Loaded %d schemas for %s", len(self.schemas), user.username or user.id)
        self._set_loading(False)

    async def sign_out(self) -> None:
        confirmed = await self.page.show_confirm_dialog(
            "Are you sure you want to sign out?",
            "Confirm",
            "SIGN OUT",
            "Cancel",
        )
        if not confirmed:
            return
        try:
            await self.sign_out_uc.execute()
        except UseCaseError as exc:
            await self.page.show_error(exc)
            return
        self.state.user = None
        self.page.navigate(SIGN_IN_PATH)

    def _set_loading(self, value: bool) -> None:
        self.state.loading = value
        self.page.set_loading(value)


__all__ = ["DENIED_PATH", "MainPresenter", "MainState", "SIGN_IN_PATH"]
