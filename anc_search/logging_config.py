"""Logging helpers for the search layer.

Modules log through ``anc_search.*`` loggers and never touch the root
logger. A host that wants this package's output on a stream calls
``configure_logging``; otherwise records propagate to whatever the host
has configured.
"""

import logging
import sys
from typing import Any, TextIO

from anc_search.config import get_settings

PACKAGE_LOGGER = "anc_search"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _PackageHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging, so it can be replaced."""


def configure_logging(
    level: str | None = None,
    stream: TextIO | None = None,
    propagate: bool = True,
) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling it again replaces the handler it installed before. Handlers
    added by the host, on this logger or on the root, are left alone.

    Args:
        level: Log level; defaults to the ``log_level`` setting
        stream: Output stream; defaults to stderr
        propagate: Whether records also reach the host's root handlers

    Returns:
        The package logger
    """
    level = (level or get_settings().log_level).upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(package_logger.handlers):
        if isinstance(handler, _PackageHandler):
            package_logger.removeHandler(handler)
            handler.close()

    handler = _PackageHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate

    package_logger.debug(f"Logging configured with level: {level}")
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_progress(
    logger: logging.Logger,
    operation: str,
    current: int,
    total: int,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log progress for multi-step operations.

    Args:
        logger: Logger instance
        operation: Operation name
        current: Current progress count
        total: Total count
        level: Log level to emit at
        **kwargs: Additional context to log
    """
    percentage = (current / total * 100) if total > 0 else 0
    context = " | ".join(f"{k}={v}" for k, v in kwargs.items())
    message = f"{operation}: {current}/{total} ({percentage:.1f}%)"
    if context:
        message += f" | {context}"
    logger.log(level, message)
