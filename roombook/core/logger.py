"""
Logging setup for the "roombook" logger namespace.

Every module logs through logging.getLogger("roombook.<area>"), so a single
handler on the parent logger covers routers, clients and session code.
"""

import logging
import sys
from typing import Optional

from roombook.core.config import settings


LOG_FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root "roombook" logger.

    Safe to call more than once: the stdout handler is only attached the
    first time, later calls just adjust the level.

    Args:
        level: Log level name (defaults to settings.LOG_LEVEL)

    Returns:
        The configured "roombook" logger
    """
    logger = logging.getLogger("roombook")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger
