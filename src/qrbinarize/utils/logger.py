"""
QrBinarize - Logger Module

This module sets up logging for the package.
"""

import logging

from qrbinarize.config import LOG_FORMAT, LOG_LEVEL, LOGGER_NAME


def setup_logger(
    log_level: int | None = None,
    log_format: str | None = None,
    logger_name: str | None = None,
) -> logging.Logger:
    """Set up and configure the package logger.

    Args:
        log_level: Logging level to use (default: LOG_LEVEL from config)
        log_format: Logging format string (default: LOG_FORMAT from config)
        logger_name: Name for the logger (default: LOGGER_NAME from config)

    Returns:
        A configured Logger instance
    """
    if log_level is None:
        log_level = LOG_LEVEL
    if log_format is None:
        log_format = LOG_FORMAT
    if logger_name is None:
        logger_name = LOGGER_NAME

    logging.basicConfig(level=log_level, format=log_format, datefmt="%H:%M:%S")

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    return logger


logger = logging.getLogger(LOGGER_NAME)
