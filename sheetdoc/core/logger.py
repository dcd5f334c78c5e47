from __future__ import annotations

import logging

from sheetdoc_io.utils.log import configure_logger

from . import settings  # noqa: F401


def get_logger() -> logging.Logger:
    """Return the ``sheetdoc`` application logger.

    It writes through the same handlers as the engine loggers, so one process
    keeps a single ``<home>/logs/sheetdoc.log``.
    """
    return configure_logger("sheetdoc")
