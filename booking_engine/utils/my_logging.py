# booking_engine/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from typing import Optional

from booking_engine.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Per-statement SQL, pool checkouts and per-request access lines
LIBRARY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "uvicorn.access",
    "httpx",
)


def resolve_level(name: str) -> int:
    """Map a LOG_LEVEL name to its number; unknown names fall back to INFO"""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(quiet_libraries: Optional[bool] = None) -> None:
    """
    Configure root logging from settings.

    quiet_libraries defaults to LOG_QUIET_LIBRARIES; when set, library
    loggers only pass warnings through, otherwise they inherit the root level.
    """
    settings = get_settings()
    if quiet_libraries is None:
        quiet_libraries = settings.LOG_QUIET_LIBRARIES

    logging.basicConfig(
        level=resolve_level(settings.LOG_LEVEL),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    library_level = logging.WARNING if quiet_libraries else logging.NOTSET
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
