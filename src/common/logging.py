"""Logging configuration for the blog content engine.

Every module logs through ``setup_logging(module_name=...)``. The level comes
from the ``level`` argument, else from ``BLOG_LOG_LEVEL`` (a name such as
``DEBUG`` or ``warning``), else INFO.
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL_ENV = "BLOG_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: int | str | None = None) -> int:
    """Turn a level name or number into a logging level.

    Raises:
        ValueError: If the name is not a standard logging level.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "") or logging.INFO
    if isinstance(level, int):
        return level

    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: int | str | None = None,
    module_name: str = "blog_engine",
) -> logging.Logger:
    """Configure and return a module logger writing to stdout.

    Args:
        level: Logging level or level name (default from BLOG_LOG_LEVEL, else INFO).
        module_name: Name for the logger instance.

    Returns:
        Configured logger. A logger that already has a handler is returned as is.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    level = resolve_level(level)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)

    return logger
