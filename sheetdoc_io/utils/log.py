"""Logging helpers shared by the engine and the application shell."""

# Module responsibilities:
# - Build one rotating file handler and one console handler per process.
# - Attach them to each package namespace (sheetdoc_io, sheetdoc) on first use.

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import List, Optional

LOG_FILE = "sheetdoc.log"

_HANDLERS: Optional[List[logging.Handler]] = None


def _default_log_base() -> Path:
    home = os.getenv("SHEETDOC_HOME")
    base = Path(home).expanduser() if home else Path.home() / "SheetDoc"
    return base / "logs"


def _shared_handlers(log_dir: Optional[Path] = None) -> List[logging.Handler]:
    """Create the file + console handlers once; later directories are ignored."""
    global _HANDLERS
    if _HANDLERS is not None:
        return _HANDLERS

    directory = Path(log_dir) if log_dir else _default_log_base()
    directory.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.handlers.RotatingFileHandler(
        directory / LOG_FILE, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)

    _HANDLERS = [file_handler, console_handler]
    return _HANDLERS


def configure_logger(namespace: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Attach the shared handlers to the ``namespace`` logger if not done yet."""

    logger = logging.getLogger(namespace)
    for handler in _shared_handlers(log_dir):
        if handler not in logger.handlers:
            logger.addHandler(handler)
    if logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the package root logger namespace.
        log_dir: Optional override for the logging directory.

    Returns:
        Configured logger scoped under ``sheetdoc_io``.
    """

    configure_logger("sheetdoc_io", log_dir)
    return logging.getLogger(f"sheetdoc_io.{name}")
