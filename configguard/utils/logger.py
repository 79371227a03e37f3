"""Logging configuration for ConfigGuard."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if no handlers exist
    if not logger.handlers:
        log_level = getattr(logging, level.upper() if level else "INFO")
        logger.setLevel(log_level)

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

        logger.addHandler(handler)

    return logger


def set_log_level(level: str) -> None:
    """Apply ``level`` to every ConfigGuard logger configured so far."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    for name, logger in logging.root.manager.loggerDict.items():
        if not name.startswith("configguard") or not isinstance(logger, logging.Logger):
            continue
        logger.setLevel(log_level)
        for handler in logger.handlers:
            handler.setLevel(log_level)
