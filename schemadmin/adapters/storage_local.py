from __future__ import annotations

import json
import os
import tempfile
from typing import Any, Dict, Optional

from schemadmin.viewmodels.settings_vm import default_settings_payload


class StorageLocal:
    """Local filesystem storage for user settings (JSON)."""

    SETTINGS_FILE = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, self.SETTINGS_FILE)

    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        """Write settings atomically: temp file in the same folder, then replace."""
        os.makedirs(self.root, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix="user_settings_", suffix=".tmp", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2, sort_keys=True)
            os.replace(tmp_path, self.settings_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def load_user_settings(self) -> Dict[str, Any]:
        """Return persisted settings, or the defaults when nothing was saved."""
        data: Optional[Dict[str, Any]] = None
        if os.path.exists(self.settings_path):
            with open(self.settings_path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        if not data:
            return default_settings_payload()
        if not isinstance(data, dict):
            raise ValueError(f"{self.settings_path} must contain a JSON object.")
        return data
