"""Logging helpers: module loggers plus an opt-in stderr handler."""

from __future__ import annotations

import logging
import os
import sys

LIBRARY_LOGGER = "timegrid_layout"
LOG_LEVEL_ENV = "TIMEGRID_LAYOUT_LOG_LEVEL"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for ``name``; the package logger when omitted."""
    return logging.getLogger(name or LIBRARY_LOGGER)


def configure_logging(level: str | int | None = None, force: bool = False) -> None:
    """Send ``timegrid_layout`` records to stderr at ``level``.

    ``level`` falls back to ``$TIMEGRID_LAYOUT_LOG_LEVEL``, then INFO. The
    root logger is left alone. Repeated calls keep the single stderr
    handler unless ``force`` replaces it.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LIBRARY_LOGGER)
    logger.setLevel(level)

    if force:
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
    elif any(getattr(h, "stream", None) is sys.stderr for h in logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
