"""
rasterkit Logging Configuration

This module provides logging configuration for the rasterkit package.
Users can control logging output through standard Python logging facilities.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

from .config import LOG_LEVEL_ENV_VAR, PACKAGE_LOGGER


def setup_logging(
    level: Optional[Union[int, str]] = None,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    date_format: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging for rasterkit.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
               Can be string or logging constant. Falls back to the
               RASTERKIT_LOG_LEVEL environment variable, then INFO.
        log_file: Optional path to log file
        format_string: Custom format string for log messages
        date_format: Custom date format string

    Returns:
        logging.Logger: Configured logger instance

    Examples:
        # Basic setup with INFO level
        >>> from rasterkit import setup_logging
        >>> setup_logging()

        # Debug mode for development
        >>> setup_logging(level=logging.DEBUG)

        # Write logs to file
        >>> setup_logging(log_file='/path/to/rasterkit.log')

        # Level from the environment
        >>> # RASTERKIT_LOG_LEVEL=DEBUG python process.py
        >>> setup_logging()

        # Disable logging
        >>> import logging
        >>> logging.getLogger('rasterkit').disabled = True
    """
    # Explicit level first, then the environment, then INFO
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, logging.INFO)

    # Convert string level to logging constant
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Default format strings
    if format_string is None:
        format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    if date_format is None:
        date_format = '%Y-%m-%d %H:%M:%S'

    # Get or create the package logger
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    # Create formatter
    formatter = logging.Formatter(format_string, datefmt=date_format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_path}")

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically the module path below the package)

    Returns:
        logging.Logger: Logger instance

    Examples:
        >>> logger = get_logger('io.header_file')
        >>> logger.debug("Reading header...")
    """
    return logging.getLogger(f'{PACKAGE_LOGGER}.{name}')


# Initialize default logger with NullHandler (no output by default)
_default_logger = logging.getLogger(PACKAGE_LOGGER)
if not _default_logger.handlers:
    _default_logger.addHandler(logging.NullHandler())
_default_logger.setLevel(logging.WARNING)  # Only warnings and errors by default


# Convenience function to quickly change log level
def set_log_level(level: Union[int, str]) -> None:
    """
    Quickly change the logging level for rasterkit.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> from rasterkit import set_log_level
        >>> set_log_level('DEBUG')   # Show every read and write
        >>> set_log_level('ERROR')   # Only show errors
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Update all handlers
    for handler in logger.handlers:
        handler.setLevel(level)
