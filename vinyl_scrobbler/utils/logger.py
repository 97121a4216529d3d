"""Logging configuration for Vinyl Scrobbler."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import coloredlogs

# Libraries that log every HTTP request at DEBUG
NOISY_LOGGERS = ("urllib3", "requests")

CONSOLE_FORMAT = '%(asctime)s %(levelname)s %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(
    name: str = "vinyl_scrobbler",
    log_file: Optional[Path] = None,
    level: str = "INFO",
    max_size_mb: int = 5,
    backup_count: int = 3,
    console: bool = True,
    console_level: Optional[str] = None
) -> logging.Logger:
    """Set up the application logger.

    The file handler records everything at ``level``. The console handler
    writes to stderr so that it never interleaves with the tables printed on
    stdout, and can be made quieter with ``console_level``.

    Args:
        name: Logger name
        log_file: Path to log file (if None, no file logging)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        max_size_mb: Maximum log file size in MB before rotation
        backup_count: Number of rotated log files to keep
        console: Whether to add a console handler
        console_level: Console threshold (defaults to ``level``)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(
            logging.Formatter(fmt=FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
        )
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, (console_level or level).upper()))
        console_handler.setFormatter(
            coloredlogs.ColoredFormatter(fmt=CONSOLE_FORMAT, datefmt='%H:%M:%S')
        )
        logger.addHandler(console_handler)

    return logger
