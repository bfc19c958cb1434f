"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "hobbylink"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO, *, sql_debug: bool = False) -> logging.Logger:
    """Install a stdout handler on the application logger.

    Calling this more than once returns the already configured logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger  # already configured
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    # keep engine chatter out of the application log unless asked for
    if not sql_debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
