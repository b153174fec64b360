"""Logging configuration for the application."""

import logging
import sys
from typing import Optional

from autosolver.core.config import settings


def setup_logging(log_level: str = None, log_file: Optional[str] = None) -> logging.Logger:
    """Configure logging for the application."""
    if log_level is None:
        log_level = settings.log_level
    if log_file is None:
        log_file = settings.log_file

    # Create a custom formatter for consistent alignment
    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)-35s - %(threadName)-14s - %(levelname)-8s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Quiet the HTTP and auth stacks used by the Google client
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)

    return logging.getLogger(__name__)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module."""
    return logging.getLogger(name)
