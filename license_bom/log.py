"""Package-wide logging helpers.

A NullHandler is installed on the package logger so library use stays
silent until an application configures logging.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER_NAME = "license_bom"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger scoped to license_bom.

    Args:
        name: Fully qualified logger name. Defaults to the package logger.

    Returns:
        Logger instance for the requested name.
    """
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[IO[str]] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this repeatedly replaces the previously installed stream handler
    instead of stacking handlers.

    Args:
        level: Logging level or level name.
        stream: Target stream, defaults to stderr.
        fmt: Log record format string.

    Returns:
        The configured package logger.
    """
    logger = get_logger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, logging.StreamHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger
