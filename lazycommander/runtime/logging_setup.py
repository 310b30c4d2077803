"""File-based logging for the TUI session.

The terminal is owned by the UI while running, so records go to a rotating
log file rather than stderr.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import DEFAULT_LOG_PATH

_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "WARNING", log_path: Path | None = None) -> Path | None:
    """Attach a rotating file handler to the ``lazycommander`` logger.

    Returns the log file path, or ``None`` when the file cannot be opened, in
    which case records are dropped instead of reaching the terminal.
    """
    target = DEFAULT_LOG_PATH if log_path is None else log_path
    root = logging.getLogger("lazycommander")
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            target,
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        root.addHandler(logging.NullHandler())
        return None

    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)
    return target
