"""Logging configuration for Spin Odds."""

import logging
import sys
from typing import Optional

from spin_odds.config import LOG_LEVEL, LOG_FORMAT


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string for log messages
    """
    level = level or LOG_LEVEL
    format_string = format_string or LOG_FORMAT

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # The report tables go to stdout too; keep rich's own logger quiet
    logging.getLogger("rich").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)
