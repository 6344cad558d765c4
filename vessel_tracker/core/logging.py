"""Logging setup

One named logger for the whole service, configured once from settings. Modules
import `logger` and tag their lines ("[FETCHER] ...", "[API] ...").
"""
import logging
import os
import sys
from typing import Optional

from vessel_tracker.core.config import settings


# DEBUG logs are disabled in production
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development") == "production"

_PRODUCTION_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
_DEVELOPMENT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(level_name: str, production: bool = IS_PRODUCTION) -> int:
    """Numeric level for a configured name; unknown names fall back to INFO"""
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    if production and level < logging.INFO:
        level = logging.INFO
    return level


def setup_logging(name: Optional[str] = None, level_name: Optional[str] = None) -> logging.Logger:
    """Configure the service logger

    Args:
        name: logger name (default: settings.logger_name)
        level_name: level name (default: settings.log_level)

    Returns:
        the configured logger; calling again only updates its level
    """
    logger = logging.getLogger(name or settings.logger_name)
    level = resolve_log_level(level_name or settings.log_level)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(
            fmt=_PRODUCTION_FORMAT if IS_PRODUCTION else _DEVELOPMENT_FORMAT,
            datefmt=_DATE_FORMAT,
        ))
        logger.addHandler(handler)

    return logger


logger = setup_logging()


def sanitize_for_log(value: object, max_length: int = 40) -> str:
    """Render a user-supplied value for a log line

    Args:
        value: raw value (query parameter, path segment...)
        max_length: truncation length

    Returns:
        printable, truncated representation
    """
    if value is None:
        return "[none]"

    text = str(value)
    if not text:
        return "[empty]"

    # keep control characters out of the log stream
    text = text.replace("\r", "\\r").replace("\n", "\\n")

    if len(text) > max_length:
        text = text[:max_length] + "..."

    return text
