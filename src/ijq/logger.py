"""Logging configuration for ijq using loguru."""

import os
import sys
from loguru import logger
from typing import Optional

from ijq.utils import get_data_dir

# Store the configured log file path to ensure consistency
_log_file_path: Optional[str] = None


def setup_logger(
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    console_output: bool = False,
) -> None:
    """
    Configure loguru logger with file and optional console output.

    The terminal belongs to the UI while a session is running, so the
    console sink is off unless explicitly requested.

    Args:
        log_file: Path to the log file (if None, uses the previously configured path or
            ``<data dir>/ijq.log``)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        rotation: Log rotation size
        retention: How long to keep old logs
        compression: Compression format for old logs
        console_output: Whether to output to stderr
    """
    global _log_file_path

    if log_file is None:
        if _log_file_path is None:
            _log_file_path = os.path.join(get_data_dir(), "ijq.log")
        log_file = _log_file_path
    else:
        log_file = os.path.abspath(os.path.expanduser(log_file))
        _log_file_path = log_file

    # Remove default handler
    logger.remove()

    if console_output:
        logger.add(
            sys.stderr,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            colorize=True,
        )

    try:
        os.makedirs(os.path.dirname(log_file), exist_ok=True)
    except OSError:
        # loguru reports the failure itself when the sink is opened
        pass

    logger.add(
        log_file,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation=rotation,
        retention=retention,
        compression=compression,
        encoding="utf-8",
    )


def get_logger(name: Optional[str] = None):
    """
    Get a configured logger instance.

    Args:
        name: Optional name for the logger

    Returns:
        Logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger


# Silent until the CLI configures a sink; library use and tests write no files.
logger.remove()
