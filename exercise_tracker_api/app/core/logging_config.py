"""
Logging setup for the exercise tracker.

``setup_logging`` always applies ``LOG_LEVEL`` to the
``exercise_tracker_api`` logger, even when something else (uvicorn,
pytest) configured the root logger first.  A console handler is only
attached to the root logger when it has none.  ``LOG_FILE`` is
resolved against the project root like the database path, and its
handler is attached to the application logger at most once.
"""

import logging
import os
from typing import Optional

from .config import resolve_project_path

APP_LOGGER_NAME = "exercise_tracker_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str) -> Optional[int]:
    """Map a level name (any case) or number to a logging level; ``None`` if unknown."""
    text = str(level).strip()
    if text.isdigit():
        return int(text)
    numeric_level = logging.getLevelName(text.upper())
    return numeric_level if isinstance(numeric_level, int) else None


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure logging and return the application logger.

    Safe to call repeatedly: the level is re-applied every time while
    handlers are never duplicated.
    """
    numeric_level = parse_level(level)
    unknown_level = numeric_level is None
    if unknown_level:
        numeric_level = logging.INFO
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(numeric_level)

    root = logging.getLogger()
    if not root.handlers:
        root.setLevel(numeric_level)
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile:
        log_path = os.path.abspath(resolve_project_path(logfile))
        already_attached = any(
            getattr(handler, "baseFilename", None) == log_path
            for handler in app_logger.handlers
        )
        if not already_attached:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            app_logger.addHandler(file_handler)

    if unknown_level:
        app_logger.warning("Unknown log level %r, using INFO", level)
    return app_logger
