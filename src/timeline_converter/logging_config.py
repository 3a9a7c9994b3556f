"""Centralized logging configuration for timeline-converter."""

import logging
import logging.config
import os
import sys

from pathlib import Path
from typing import Any

from timeline_converter.constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_MAX_BYTES,
)

PACKAGE_LOGGER = "timeline_converter"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"

_logging_configured = False


def get_log_path() -> Path:
    """
    Get path to the active log file, creating its directory if needed.

    Returns:
        Path to timeline-converter.log
    """
    os.makedirs(DEFAULT_LOG_DIR, mode=0o700, exist_ok=True)
    return DEFAULT_LOG_DIR / DEFAULT_LOG_FILE


def _get_user_logging_config() -> dict[str, Any]:
    """
    Read the [logging] section of the config file.

    Returns:
        Logging settings, or empty dict if not configured or unreadable
    """
    from timeline_converter.config import load_config

    section = load_config().get("logging", {})
    return section if isinstance(section, dict) else {}


def _console_level(verbose: bool, quiet: bool) -> str:
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return "INFO"


def _build_logging_config(
    verbose: bool = False,
    quiet: bool = False,
    file_logging: bool = True,
) -> dict[str, Any]:
    """
    Build the dictConfig dictionary for the package logger.

    Only the ``timeline_converter`` logger tree is configured, so libraries
    and host applications keep their own logging setup.

    Args:
        verbose: Console at DEBUG
        quiet: Console at WARNING (ignored when verbose)
        file_logging: Allow the rotating file handler if config enables it

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": _console_level(verbose, quiet),
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    }

    user_config = _get_user_logging_config() if file_logging else {}
    if file_logging and user_config.get("enabled", True):
        max_size_mb = user_config.get("max_size_mb")
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": str(user_config.get("level", "DEBUG")).upper(),
            "formatter": "file",
            "filename": str(get_log_path()),
            "maxBytes": (
                int(max_size_mb) * 1024 * 1024 if max_size_mb else DEFAULT_LOG_MAX_BYTES
            ),
            "backupCount": int(user_config.get("backup_count", DEFAULT_LOG_BACKUP_COUNT)),
            "encoding": "utf-8",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT},
            "file": {"format": FILE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            PACKAGE_LOGGER: {
                "level": "DEBUG",
                "handlers": list(handlers),
                "propagate": False,
            },
        },
    }


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    file_logging: bool = True,
) -> None:
    """
    Configure logging for the command-line tool.

    Library callers should not call this; they get whatever logging their
    application sets up. Only the first call has any effect.

    Args:
        verbose: Show DEBUG messages on the console
        quiet: Only show warnings and errors on the console
        file_logging: Also log to the rotating file (if enabled in config)
    """
    global _logging_configured

    if _logging_configured:
        return

    try:
        config = _build_logging_config(
            verbose=verbose, quiet=quiet, file_logging=file_logging
        )
        logging.config.dictConfig(config)
    except Exception as e:
        sys.stderr.write(f"WARNING: Failed to configure logging: {e}\n")
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=CONSOLE_FORMAT,
        )

    _logging_configured = True


def reset_logging() -> None:
    """Drop the package handlers so setup_logging() can run again."""
    global _logging_configured

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.propagate = True
    _logging_configured = False
