from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from ..utils.logging import env_forces_debug


def _default_sort() -> Dict[str, int]:
    return {"createdAt": -1}


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    api_base_url: str = ""
    app_id: str = ""
    api_key: str = ""
    session_token: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    page_limit: int = 20
    search_debounce_ms: int = 500
    default_sort: Dict[str, int] = field(default_factory=_default_sort)


_STR_KEYS = ("api_base_url", "app_id", "api_key", "session_token")
_INT_KEYS = ("request_timeout_s", "retries", "page_limit", "search_debounce_ms")


class SettingsVM:
    """Keeps connection/list settings and their validation, no I/O here."""

    def __init__(self, *, config: Optional[SettingsConfig] = None) -> None:
        self.config = config or SettingsConfig()
        self.debug_logging: bool = env_forces_debug()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self.config = replace(self.config, api_base_url=self._coerce_str(value).rstrip("/"))

    @property
    def page_limit(self) -> int:
        return self.config.page_limit

    @page_limit.setter
    def page_limit(self, value: int) -> None:
        self.config = replace(self.config, page_limit=self._coerce_int("page_limit", value, minimum=1))

    @property
    def search_debounce_ms(self) -> int:
        return self.config.search_debounce_ms

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @property
    def default_sort(self) -> Dict[str, int]:
        return dict(self.config.default_sort)

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if self.config.api_base_url and not self.config.api_base_url.startswith(("http://", "https://")):
            return False
        return self.config.page_limit > 0 and self.config.request_timeout_s > 0

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed = {*SettingsConfig.__annotations__.keys(), "debug_logging"}
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for key in _STR_KEYS:
            if key in payload:
                updates[key] = self._coerce_str(payload[key])
        if "api_base_url" in updates:
            updates["api_base_url"] = updates["api_base_url"].rstrip("/")
        for key in _INT_KEYS:
            if key in payload:
                minimum = 0 if key == "retries" else 1
                updates[key] = self._coerce_int(key, payload[key], minimum=minimum)
        if "default_sort" in payload:
            updates["default_sort"] = self._coerce_sort(payload["default_sort"])
        if updates:
            self.config = replace(self.config, **updates)

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging = self._coerce_bool(enabled)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _coerce_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: int) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        try:
            coerced = int(value.strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer.") from exc
        if coerced < minimum:
            raise ValueError(f"{name} must be at least {minimum}.")
        return coerced

    @staticmethod
    def _coerce_sort(value: Any) -> Dict[str, int]:
        if not isinstance(value, Mapping):
            raise ValueError("default_sort must be a mapping of field to 1 or -1.")
        sort: Dict[str, int] = {}
        for key, direction in value.items():
            if direction not in (1, -1) or isinstance(direction, bool):
                raise ValueError(f"default_sort direction for '{key}' must be 1 or -1.")
            sort[str(key)] = int(direction)
        return sort


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
