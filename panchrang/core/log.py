"""Logger configuration for panchrang.

Library modules log through children of the 'panchrang' logger
(e.g. 'panchrang.election'). Nothing here runs at import time of the
pure colour functions.
"""

import logging
import sys

from panchrang.core.env import get_settings

__all__ = ['get_logger', 'setup_logger']

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str = 'panchrang',
    level: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure and return the project logger.

    Args:
        name: Logger name (the project root logger by default)
        level: Log level name; falls back to LOG_LEVEL from settings
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    level = level or get_settings().log_level
    logger = logging.getLogger(name)

    # Only configure once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=format_string or DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        logger.propagate = False

    return logger


def get_logger(module: str) -> logging.Logger:
    """Return a child of the project logger, configuring the root on first use."""
    root = setup_logger()
    return root.getChild(module)
