### Logging Configuration Module ###
# Date : 10/17/2026
# File : logging_config.py

"""
Logging Configuration
Sets up the package logger for ColorimeterTool.

Every module logs to a child of ``ColorimeterTool`` via
``logging.getLogger(__name__)``.  The package itself only installs a
``NullHandler``; front ends call ``setup_logging`` to see the output.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = __name__.split(".")[0]

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None,
                  console: bool = True) -> logging.Logger:
    """
    Configures the logger for the 'ColorimeterTool' namespace.

    Args:
        level: Logging level, as a number or a name (e.g. logging.DEBUG, "info")
        log_file: Optional path to save logs to a file.
        console: Also log to stdout.  Turn off for file-only logging.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Replace handlers from an earlier call, including the NullHandler
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.info("Logging initialized.")
    return logger
