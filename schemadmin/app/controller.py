"""Adapter and use-case wiring for the admin UI runtime.

This module owns lazy construction of the collection adapter and use-case
objects that depend on values in
:class:`schemadmin.viewmodels.settings_vm.SettingsVM`, and builds presenters
with their collaborators passed explicitly.
"""

from __future__ import annotations

from typing import Optional, Union

from ..adapters.collection_memory import CollectionMemory
from ..adapters.collection_rest import CollectionRestAdapter
from ..adapters.http_client import HttpConfig
from ..domain.entities import SchemaRegistry
from ..usecases.count_objects import CountObjects
from ..usecases.delete_object import DeleteObject
from ..usecases.find_objects import FindObjects
from ..usecases.get_current_user import GetCurrentUser
from ..usecases.get_object import GetObject
from ..usecases.get_schemas import GetSchemas
from ..usecases.sign_out import SignOut
from ..usecases.upsert_object import UpsertObject
from ..viewmodels.settings_vm import SettingsVM
from .base_page import BasePage
from .debounce_scheduler import DebounceScheduler
from .form_presenter import FormPresenter
from .list_presenter import ListPresenter
from .main_presenter import MainPresenter

Adapter = Union[CollectionRestAdapter, CollectionMemory]


class AppController:
    """Create and cache the adapter, use-cases and schema registry.

    Call chain:
        The page bootstrap creates one instance per process and asks it for a
        presenter per mounted page. All presenters share one ``SchemaRegistry``
        that ``MainPresenter.initialize`` fills.
    """

    def __init__(self, settings_vm: SettingsVM, *, adapter: Optional[Adapter] = None) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Connection and list preferences used to build the
                adapter and presenters.
            adapter: Pre-built adapter (for example ``CollectionMemory``);
                when given, settings are not consulted for the transport.
        """
        self.settings_vm = settings_vm
        self.schemas = SchemaRegistry()
        self._injected = adapter
        self._adapter: Optional[Adapter] = adapter
        self.uc_find: Optional[FindObjects] = None
        self.uc_count: Optional[CountObjects] = None
        self.uc_delete: Optional[DeleteObject] = None
        self.uc_get: Optional[GetObject] = None
        self.uc_upsert: Optional[UpsertObject] = None
        self.uc_current_user: Optional[GetCurrentUser] = None
        self.uc_sign_out: Optional[SignOut] = None
        self.uc_schemas: Optional[GetSchemas] = None

    @property
    def adapter(self) -> Optional[Adapter]:
        return self._adapter

    def reset(self) -> None:
        """Drop cached transport and use-cases so settings changes take effect."""
        self._adapter = self._injected
        self.uc_find = None
        self.uc_count = None
        self.uc_delete = None
        self.uc_get = None
        self.uc_upsert = None
        self.uc_current_user = None
        self.uc_sign_out = None
        self.uc_schemas = None

    def ensure_ready(self) -> bool:
        """Ensure the adapter and use-cases exist.

        Returns:
            ``True`` when dependencies are available, ``False`` while no API
            base URL is configured (and no adapter was injected).
        """
        if self._adapter is None:
            cfg = self.settings_vm.config
            if not cfg.api_base_url:
                return False
            self._adapter = CollectionRestAdapter(
                cfg.api_base_url,
                HttpConfig(
                    request_timeout_s=cfg.request_timeout_s,
                    retries=cfg.retries,
                    app_id=cfg.app_id or None,
                    api_key=cfg.api_key or None,
                    session_token=cfg.session_token or None,
                ),
            )
        if self.uc_find is None:
            port = self._adapter
            self.uc_find = FindObjects(port)
            self.uc_count = CountObjects(port)
            self.uc_delete = DeleteObject(port)
            self.uc_get = GetObject(port)
            self.uc_upsert = UpsertObject(port)
            self.uc_current_user = GetCurrentUser(port)
            self.uc_sign_out = SignOut(port)
            self.uc_schemas = GetSchemas(port)
        return True

    def _require_ready(self) -> None:
        if not self.ensure_ready():
            raise RuntimeError("API base URL is not configured.")

    # ------------------------------------------------------------------
    # Presenter factories
    # ------------------------------------------------------------------
    def main_presenter(self, page: BasePage) -> MainPresenter:
        self._require_ready()
        return MainPresenter(
            page=page,
            schemas=self.schemas,
            get_current_user=self.uc_current_user,
            sign_out=self.uc_sign_out,
            get_schemas=self.uc_schemas,
        )

    def list_presenter(self, page: BasePage, *, scheduler: Optional[DebounceScheduler] = None) -> ListPresenter:
        self._require_ready()
        return ListPresenter(
            page=page,
            schemas=self.schemas,
            find_objects=self.uc_find,
            count_objects=self.uc_count,
            delete_object=self.uc_delete,
            limit=self.settings_vm.page_limit,
            default_sort=self.settings_vm.default_sort,
            search_debounce_ms=self.settings_vm.search_debounce_ms,
            scheduler=scheduler,
        )

    def form_presenter(self, page: BasePage) -> FormPresenter:
        self._require_ready()
        return FormPresenter(
            page=page,
            schemas=self.schemas,
            get_object=self.uc_get,
            upsert_object=self.uc_upsert,
        )


__all__ = ["AppController"]
