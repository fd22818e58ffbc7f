"""Logging configuration utilities for setwise."""

import logging
from typing import Optional

from .settings import get_log_level

_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)


def verbosity_to_level(verbose_count: int) -> Optional[str]:
    """Map the number of -v flags to a log level name."""
    if verbose_count <= 0:
        return None
    if verbose_count == 1:
        return "WARNING"
    if verbose_count == 2:
        return "INFO"
    return "DEBUG"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure application-wide logging once."""
    if logging.getLogger().handlers:
        return

    log_level = level or get_log_level()
    logging.basicConfig(level=log_level.upper(), format=_LOG_FORMAT)
