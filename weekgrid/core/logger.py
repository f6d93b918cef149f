"""
Logger factory shared by all engine modules.
"""

import logging
import sys

from weekgrid.core.config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """
    Get a module logger with a single stream handler attached.

    Args:
        name: Logger name, usually ``__name__``

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(get_settings().LOG_LEVEL)
    return logger
