"""Logging configuration for the action builder."""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER = "action_builder"
LOG_LEVEL_ENV = "ACTION_BUILDER_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"


def setup_logger(
    name: str, level: str = DEFAULT_LEVEL, json_output: bool = False
) -> logging.Logger:
    """
    Set up logger with appropriate handlers.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: If True, send logs to stderr to avoid contaminating JSON stdout

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Clear existing handlers
    logger.handlers.clear()

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Use stderr for JSON output to keep stdout clean
    handler = logging.StreamHandler(sys.stderr if json_output else sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def resolve_log_level(log_level: Optional[str] = None) -> str:
    """Pick the log level: CLI option > environment > default."""
    if log_level:
        return log_level.upper()
    return os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL).upper()


def get_logger(name: str) -> logging.Logger:
    """Get the package child logger for a module.

    Handlers live on the package root logger configured by ``setup_logger``,
    so module loggers only propagate.
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
