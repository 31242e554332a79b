"""
Logger module for kube-preflight.

Provides the low-severity logging sink: raw underlying errors (stat errors,
failed command invocations) are recorded here at debug level, separate from
the user-facing [WARN] diagnostics.

Log records go to stderr through Rich, and optionally to a plain-text file.
"""

import logging
import os
from typing import Optional
from threading import Lock

from rich.console import Console
from rich.logging import RichHandler


LOGGER_NAME = "kube_preflight"

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# =============================================================================
# Global Logger Instance
# =============================================================================

_logger_instance: Optional[logging.Logger] = None
_logger_lock = Lock()


def verbosity_to_level(verbosity: int) -> int:
    """
    Map a -v style verbosity count to a logging level.

    0 shows only warnings and errors; 1 or more enables debug records.
    """
    return logging.DEBUG if verbosity >= 1 else logging.WARNING


def init_logger(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_format: str = DEFAULT_FORMAT,
    console: Optional[Console] = None
) -> logging.Logger:
    """
    Initialize the global logger instance.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        verbosity: Verbosity count (0 = warnings only, 1+ = debug)
        log_file: Optional path to a log file; parent directories are created
        log_format: Format used for the log file
        console: Optional Rich Console for the stderr handler

    Returns:
        The configured logger
    """
    global _logger_instance

    with _logger_lock:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(verbosity_to_level(verbosity))
        logger.propagate = False

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        stream_handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            markup=False,
        )
        logger.addHandler(stream_handler)

        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(log_format))
            logger.addHandler(file_handler)

        _logger_instance = logger

    return _logger_instance


def get_logger() -> logging.Logger:
    """
    Get the logger used for low-severity diagnostics.

    If init_logger() was never called this returns the named logger without
    handlers, so records fall through to Python's last-resort handler
    (warnings and above only).
    """
    if _logger_instance is not None:
        return _logger_instance
    return logging.getLogger(LOGGER_NAME)


def close_logger() -> None:
    """Close the handlers of the global logger and clear the instance."""
    global _logger_instance

    with _logger_lock:
        if _logger_instance is not None:
            for handler in list(_logger_instance.handlers):
                _logger_instance.removeHandler(handler)
                handler.close()
        _logger_instance = None
