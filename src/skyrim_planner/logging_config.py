"""Logging configuration for the command-line scripts.

Library modules only log through `loguru.logger`; sinks are set up here,
once, by whoever owns the process.
"""

import os
import sys
from pathlib import Path

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:{line} - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} - {message}"


def configure_logging(level: str | None = None, log_file: str | Path | None = None):
    """Replace loguru's default sink with ours.

    `level` falls back to the LOG_LEVEL environment variable, then WARNING.
    """
    logger.remove()

    log_level = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT)

    if log_file is not None:
        logger.add(
            Path(log_file),
            rotation="5 MB",
            retention=5,
            level="DEBUG",
            format=FILE_FORMAT,
        )

    return logger
