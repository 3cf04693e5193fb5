"""Process startup: logging, persisted settings and the shared controller."""

from __future__ import annotations

import logging

from ..adapters.storage_local import StorageLocal
from ..utils.logging import apply_gui_preferences, configure_root, level_name
from ..viewmodels.settings_vm import SettingsVM
from .controller import AppController


def bootstrap(settings_dir: str = ".") -> AppController:
    """Configure logging, load ``user_settings.json`` and build the controller."""
    configure_root()
    storage = StorageLocal(root_dir=settings_dir)
    settings_vm = SettingsVM()
    settings_vm.apply_dict(storage.load_user_settings())
    level = apply_gui_preferences(settings_vm.debug_logging)
    log = logging.getLogger(__name__)
    log.info("Settings loaded from %s (log level %s)", storage.settings_path, level_name(level))
    if not settings_vm.is_valid():
        raise ValueError(f"Settings in {storage.settings_path} are invalid.")
    controller = AppController(settings_vm)
    if not controller.ensure_ready():
        log.warning("No API base URL configured; presenters are unavailable until settings are saved")
    return controller


__all__ = ["bootstrap"]
