"""Core logging implementation for stylekit."""

import logging
import sys
from typing import Optional

__all__ = ["LOGGER_NAME", "get_logger", "setup_logging"]

LOGGER_NAME = "stylekit"


def setup_logging(level: int | str = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level, either numeric or a level name ("DEBUG").
        stream: Output stream.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Names are nested under the package logger so a single handler
    configured on "stylekit" sees every module.

    Args:
        name: Name of the logger, e.g. "css" or "stylekit.css".

    Returns:
        Logger instance.
    """
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    if not name.startswith(f"{LOGGER_NAME}."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
