"""Root logger setup for the send screen runtime.

Environment overrides win over user settings:
  - ZSEND_LOG_LEVEL: explicit level (name such as ``DEBUG`` or a number)
  - ZSEND_DEBUG: truthy -> DEBUG

``urllib3`` (pulled in by ``requests``) logs every connection at DEBUG; it is
kept at WARNING unless debug logging is on.
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
LEVEL_ENV_VAR = "ZSEND_LOG_LEVEL"
DEBUG_ENV_VAR = "ZSEND_DEBUG"
_TRANSPORT_LOGGERS = ("urllib3",)


def _parse_level(value: Union[int, str, None], fallback: int) -> int:
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if text.isdigit():
        return int(text)
    named = logging.getLevelName(text.upper()) if text else None
    return named if isinstance(named, int) else fallback


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    explicit = os.getenv(LEVEL_ENV_VAR)
    if explicit and explicit.strip():
        return _parse_level(explicit, logging.INFO)
    if _truthy(os.getenv(DEBUG_ENV_VAR)):
        return logging.DEBUG
    return None


def _set_level(level: int) -> int:
    logging.getLogger().setLevel(level)
    transport_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
    return level


def configure_root(default_level: Union[int, str] = logging.INFO) -> int:
    """Install the compact console format once and return the effective level."""
    forced = env_level()
    level = forced if forced is not None else _parse_level(default_level, logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=level, format=_FORMAT, datefmt=_DATEFMT)
    return _set_level(level)


def apply_preferences(debug_enabled: bool) -> int:
    """Apply the ``debug_logging`` setting unless the environment overrides it."""
    forced = env_level()
    if forced is not None:
        return _set_level(forced)
    return _set_level(logging.DEBUG if debug_enabled else logging.INFO)


def env_requests_debug() -> bool:
    """Return True if environment variables force DEBUG logging."""
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG


__all__ = [
    "DEBUG_ENV_VAR",
    "LEVEL_ENV_VAR",
    "apply_preferences",
    "configure_root",
    "env_level",
    "env_requests_debug",
]
