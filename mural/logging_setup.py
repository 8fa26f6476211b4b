"""Logging configuration for the Mural API server."""

from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = "INFO") -> logging.Logger:
    """
    Route all log records to stdout with a single plain-text handler.

    Safe to call more than once; the previous handler is replaced.

    Args:
        level: Logging level as int or name (e.g. logging.INFO or "INFO")

    Returns:
        The package logger ("mural")
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return logging.getLogger("mural")
