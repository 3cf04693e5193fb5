"""Root logging setup for the admin UI process.

Two environment variables win over the persisted ``debug_logging`` toggle:
``SCHEMADMIN_LOG_LEVEL`` (level name or number) and ``SCHEMADMIN_DEBUG``
(truthy switches to DEBUG). Chatty transport loggers stay at WARNING unless
the effective level is DEBUG.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "SCHEMADMIN_LOG_LEVEL"
DEBUG_ENV = "SCHEMADMIN_DEBUG"
NOISY_LOGGERS = ("urllib3", "uvicorn.access", "watchfiles")


def parse_level(value: int | str | None, fallback: int = logging.INFO) -> int:
    """Turn ``"debug"``, ``"10"`` or ``10`` into a level; unknown text gives ``fallback``."""
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper())
    return candidate if isinstance(candidate, int) else fallback


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    explicit = os.getenv(LEVEL_ENV)
    if explicit and explicit.strip():
        return parse_level(explicit)
    if (os.getenv(DEBUG_ENV) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def _set_root_level(level: int, quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    logging.getLogger().setLevel(level)
    library_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in quiet:
        logging.getLogger(name).setLevel(library_level)


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install the compact handler once and return the effective level."""
    forced = env_level()
    effective = forced if forced is not None else parse_level(default_level)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    _set_root_level(effective)
    return effective


def apply_gui_preferences(debug_enabled: bool) -> int:
    """Follow the settings toggle unless the environment pins a level."""
    forced = env_level()
    if forced is not None:
        level = forced
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    _set_root_level(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_forces_debug() -> bool:
    """True when the environment alone already asks for DEBUG output."""
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG


__all__ = [
    "apply_gui_preferences",
    "configure_root",
    "env_forces_debug",
    "env_level",
    "level_name",
    "parse_level",
]
