# logging_config.py
"""
Centralized Logging Configuration for the Coulomb Engine
========================================================

One place that decides how every module of the engine logs, so that the
numerical modules only ever do

    from logging_config import get_logger
    logger = get_logger(__name__)

    logger.debug("CF1 converged after %d terms", k)
    logger.warning("All methods failed for L=%d", L)

Log Levels
----------
- DEBUG: Method selection, fallbacks, iteration counts, step sizes
- INFO: Verification sweep progress and summaries
- WARNING: Precision loss (every method in a chain failed), large
  Wronskian deviations
- ERROR: Configuration problems

Configuration
-------------
The level is read from the environment variable

    COULOMB_LOG_LEVEL=DEBUG

or set programmatically with set_log_level(logging.DEBUG). File output
is enabled with enable_file_logging("coulomb_run.log").
"""

from __future__ import annotations
import logging
import os
import sys
from datetime import datetime
from typing import Optional

# Module-level logger cache
_loggers: dict = {}

_DEFAULT_FORMAT = "%(asctime)s | %(name)-22s | %(levelname)-8s | %(message)s"
_DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LEVEL = logging.WARNING
_ENV_VARIABLE = "COULOMB_LOG_LEVEL"

_handlers_configured = False
_file_handler: Optional[logging.FileHandler] = None


def _level_from_environment() -> int:
    env_level = os.environ.get(_ENV_VARIABLE, "").upper()
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(env_level, _DEFAULT_LEVEL)


def _configure_root_handler() -> None:
    """
    Attach a single console handler to the root logger.
    Called automatically on the first get_logger() call.
    """
    global _handlers_configured

    if _handlers_configured:
        return

    level = _level_from_environment()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT)
    )

    # The host application may already own the root logger
    if not root_logger.handlers:
        root_logger.addHandler(console_handler)

    _handlers_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module name.

    Parameters
    ----------
    name : str
        Module name, typically __name__ from the calling module.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    if name not in _loggers:
        _configure_root_handler()
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def set_log_level(level: int) -> None:
    """
    Set the global log level for the root logger and its handlers.

    Parameters
    ----------
    level : int
        Logging level (e.g., logging.DEBUG, logging.INFO).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_file_logging(
    filename: Optional[str] = None,
    level: int = logging.DEBUG
) -> str:
    """
    Enable logging to a file in addition to console output.

    Parameters
    ----------
    filename : str, optional
        Path to log file. If not specified, a timestamped name is generated.
    level : int
        Log level for file output (default: DEBUG).

    Returns
    -------
    str
        Path to the log file.
    """
    global _file_handler

    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"coulomb_log_{timestamp}.log"

    disable_file_logging()

    _file_handler = logging.FileHandler(filename, encoding='utf-8')
    _file_handler.setLevel(level)
    _file_handler.setFormatter(
        logging.Formatter(_DEFAULT_FORMAT, datefmt=_DEFAULT_DATE_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(_file_handler)

    if root_logger.level > level:
        root_logger.setLevel(level)

    return filename


def disable_file_logging() -> None:
    """Remove the file handler installed by enable_file_logging(), if any."""
    global _file_handler

    if _file_handler is not None:
        root_logger = logging.getLogger()
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def silence_logger(name: str) -> None:
    """Restrict a specific logger to WARNING and above."""
    logging.getLogger(name).setLevel(logging.WARNING)


def enable_debug_mode() -> None:
    """Shortcut: full debug output to console."""
    set_log_level(logging.DEBUG)


def _configure_third_party() -> None:
    """Quiet the reference libraries used by the test suite."""
    silence_logger("mpmath")
    silence_logger("scipy")


_configure_third_party()
