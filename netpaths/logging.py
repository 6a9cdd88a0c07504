"""Centralized logging configuration for netpaths.

Every module logs through a child of the ``netpaths`` logger obtained with
:func:`get_logger`. Only that root logger owns a handler; the CLI moves its level
with :func:`enable_debug_logging`, :func:`disable_debug_logging` or
:func:`set_global_log_level`.

Process-pool workers start with a fresh interpreter state, so the parent
publishes its level in ``NETPATHS_LOG_LEVEL`` (:func:`export_log_level`) and
each worker adopts it on start-up (:func:`apply_exported_log_level`).
"""

import logging
import os
import sys
from typing import Optional, Union

ROOT_LOGGER_NAME = "netpaths"
LOG_LEVEL_ENV = "NETPATHS_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_root_configured = False


def _resolve_level(level: Union[int, str]) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the single handler of the ``netpaths`` logger.

    Calls after the first one are no-ops until :func:`reset_logging`.

    Args:
        level: Initial level.
        format_string: Record format; defaults to :data:`DEFAULT_FORMAT`.
        handler: Destination; defaults to a stdout stream handler.
    """
    global _root_configured
    if _root_configured:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    root.handlers.clear()

    handler = handler or logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root.addHandler(handler)
    # Records still reach the root logger so pytest's caplog sees them
    root.propagate = True

    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger that inherits level and handler from ``netpaths``."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the ``netpaths`` logger and of its handlers.

    Args:
        level: Numeric level or level name.
    """
    setup_root_logger()
    numeric = _resolve_level(level)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(numeric)
    for handler in root.handlers:
        handler.setLevel(numeric)


def enable_debug_logging() -> None:
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    set_global_log_level(logging.INFO)


def export_log_level() -> str:
    """Publish the effective ``netpaths`` level for worker processes.

    Returns:
        The published level name.
    """
    effective = logging.getLogger(ROOT_LOGGER_NAME).getEffectiveLevel()
    name = logging.getLevelName(effective)
    os.environ[LOG_LEVEL_ENV] = name
    return name


def apply_exported_log_level() -> Optional[int]:
    """Adopt the level published by :func:`export_log_level`.

    Returns:
        The applied level, or None when nothing was published.
    """
    published = os.getenv(LOG_LEVEL_ENV)
    if not published:
        return None
    level = _resolve_level(published)
    set_global_log_level(level)
    return level


def reset_logging() -> None:
    """Drop the handler and level of the ``netpaths`` logger (used by tests)."""
    global _root_configured
    _root_configured = False

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


setup_root_logger()
