"""Application-wide settings and environment loading."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

from .config import DEFAULT_MAX_LINE_BYTES

logger = logging.getLogger(__name__)

load_dotenv()
logger.debug("Environment variables loaded from .env if present")


@lru_cache(maxsize=1)
def get_log_level() -> str:
    """Return the default log level from the environment."""
    return os.getenv("LOG_LEVEL", "ERROR")


@lru_cache(maxsize=1)
def get_max_line_bytes() -> int:
    """Return the reader line limit from the environment."""
    raw = os.getenv("SETWISE_MAX_LINE_BYTES")
    if not raw:
        return DEFAULT_MAX_LINE_BYTES
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Ignoring non-integer SETWISE_MAX_LINE_BYTES", extra={"value": raw}
        )
        return DEFAULT_MAX_LINE_BYTES
