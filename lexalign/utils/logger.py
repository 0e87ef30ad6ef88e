"""Structured logging configuration."""

import logging
import sys
from typing import Any

# Configure logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Setup a logger with consistent formatting.

    Args:
        name: Logger name (typically __name__)
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(handler)

    return logger


def log_match_event(logger: logging.Logger, operation: str, **kwargs: Any) -> None:
    """
    Log a one-line matching event with key=value context.

    Args:
        logger: Logger instance
        operation: Operation name (tokenize, match, align...)
        **kwargs: Additional context
    """
    context = " ".join(f"{k}={v}" for k, v in kwargs.items())
    logger.info(f"[{operation.upper()}] {context}".strip())

