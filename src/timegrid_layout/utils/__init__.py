"""Shared helpers that are not part of the layout algorithm."""

from .logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
