"""Logging configuration for keepc.

Diagnostics go to stderr so they never mix with command output on stdout.
An optional log file receives full debug detail.
"""
from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

LOGGER_NAME = "keepc"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "keepc: %(levelname)s: %(message)s"

# Module-level state
_handlers: list[logging.Handler] = []


def configure_logging(verbose: bool = False, log_file: Optional[str] = None) -> Optional[Path]:
    """Configure logging for one keepc invocation.

    Args:
        verbose: Log DEBUG to stderr instead of WARNING.
        log_file: Optional path that receives all DEBUG output.

    Returns:
        Path to the log file, or None if no file logging is active.
    """
    close_logging()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)
    _handlers.append(console)

    if not log_file:
        return None

    log_path = Path(log_file).expanduser()
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError as e:
        logger.warning(f"Cannot open log file {log_path}: {e}")
        return None

    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
    logger.addHandler(file_handler)
    _handlers.append(file_handler)
    return log_path


def close_logging() -> None:
    """Remove and close handlers installed by configure_logging()."""
    logger = logging.getLogger(LOGGER_NAME)
    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()


def log_exception(error: Exception, context: str = "") -> str:
    """Log an exception with traceback at debug level.

    Returns:
        User-friendly error message (without traceback)
    """
    logger = logging.getLogger(LOGGER_NAME)
    user_msg = f"{context}: {error}" if context else str(error)
    logger.debug(f"{type(error).__name__}: {error}\n{traceback.format_exc()}")
    return user_msg
