"""Mini README: Application-wide logging helpers for Happy Softie.

Structure:
    * configure_root_logger - attaches the single stream handler once.
    * get_logger - module logger factory used across the package.

Usage:
    Modules call ``get_logger(__name__)`` at import time and keep the result
    in a module-level ``LOGGER``. Entry points (the CLI and the web factory)
    call ``configure_root_logger`` with the configured level; repeated calls
    only adjust the level so reloads never stack duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _coerce_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    candidate = str(level).strip().upper()
    if candidate.isdigit():
        return int(candidate)
    numeric = logging.getLevelName(candidate)
    if isinstance(numeric, int):
        return numeric
    raise ValueError(f"Unknown log level: {level}")


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a debugging friendly formatter."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(_coerce_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger."""

    return logging.getLogger(name)
