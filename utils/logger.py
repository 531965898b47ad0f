"""Logging setup shared by the tutorial modules."""

import logging
import os
from typing import Optional

from config.settings import settings

_FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONSOLE_FORMAT = "🗺️ %(name)s: %(message)s"

# Logger names that already carry our handlers
_configured: set = set()


def get_log_file_path() -> str:
    """Get the path of the shared log file."""
    return os.path.join(settings.logging.log_dir, settings.logging.log_file)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a named logger with file and console handlers attached.

    Handlers are attached once per logger name, so calling this at import
    time from several modules never duplicates output.

    Args:
        name: Logger name (usually the module path, e.g. "dashboard.outputs")
        level: Console level override (defaults to settings.logging.level)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if name in _configured:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if settings.logging.file_logging:
        os.makedirs(settings.logging.log_dir, exist_ok=True)
        file_handler = logging.FileHandler(get_log_file_path(), mode="a", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel((level or settings.logging.level).upper())
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    _configured.add(name)
    return logger
