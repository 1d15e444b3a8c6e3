"""File-based logging setup.

The terminal belongs to the UI while the editor runs, so log records go to a
file under the platform's per-user log directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str = "WARNING", path: Path | None = None) -> Path | None:
    """Attach a file handler to the ``tabpad`` logger.

    Returns the log path, or ``None`` when the log file cannot be created;
    logging then stays disabled rather than writing over the screen.
    """
    target = LOG_PATH if path is None else path
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return target


__all__ = ["LOG_FORMAT", "LOG_LEVELS", "LOG_PATH", "configure_logging"]
