"""
Logging configuration for the html_translate package.
"""

import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "html_translate"


def setup_logger(
    name: str = LOGGER_NAME,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and return a logger instance.

    Calling it again on an already configured logger only adjusts the
    level, so the CLI can raise verbosity after import time.

    Args:
        name: Logger name
        level: Logging level, as a number or a name like "DEBUG"
        log_file: Optional file path for logging

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a child logger for a specific module.

    Child loggers (e.g. "html_translate.parser") inherit the package
    logger's handlers and level; the name in each record tells which module
    produced it.

    Args:
        module_name: Name of the module (e.g., 'parser', 'google')

    Returns:
        Child logger instance
    """
    return logging.getLogger(f"{LOGGER_NAME}.{module_name}")
