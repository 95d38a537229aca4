"""
Logging setup for host applications embedding dosekit.

Handlers are attached to the ``dosekit`` package logger only. The root
logger and any handlers the host has configured are left alone, so calling
``setup_logging()`` from an application that already manages logging only
adds dosekit's own console and file output.
"""

import logging
import logging.handlers
import os
import sys

from pathlib import Path

from dosekit.constants import DEFAULT_LOG_FILE
from dosekit.types import LoggingSettings

PACKAGE_LOGGER = "dosekit"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_installed_handlers: list[logging.Handler] = []


def get_log_path(settings: LoggingSettings) -> Path:
    """
    Get path to the active log file, creating its directory if needed.

    Returns:
        Path to dosekit.log
    """
    log_dir = settings.log_dir
    os.makedirs(log_dir, mode=0o700, exist_ok=True)
    return log_dir / DEFAULT_LOG_FILE


def build_handlers(
    settings: LoggingSettings,
    verbose: bool = False,
    console_format: str | None = None,
) -> list[logging.Handler]:
    """
    Create the console handler and, if enabled, the rotating file handler.

    Args:
        settings: Validated [logging] settings
        verbose: If True, set console to DEBUG level
        console_format: Override console format string

    Raises:
        OSError: If the log directory or file cannot be opened
    """
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    console.setFormatter(logging.Formatter(console_format or FILE_FORMAT))
    handlers: list[logging.Handler] = [console]

    if settings.enabled:
        file_handler = logging.handlers.RotatingFileHandler(
            get_log_path(settings),
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(settings.level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)

    return handlers


def setup_logging(
    *,
    verbose: bool = False,
    console_format: str | None = None,
    settings: LoggingSettings | None = None,
    propagate: bool = False,
) -> None:
    """
    Configure the dosekit logger. Calls after the first are no-ops.

    Args:
        verbose: If True, set console to DEBUG level
        console_format: Override console format string. If None, uses full format.
        settings: File logging settings (default: the [logging] config table)
        propagate: Also pass dosekit records on to the host's handlers
    """
    if _installed_handlers:
        return

    if settings is None:
        from dosekit.config import load_logging_settings

        settings = load_logging_settings()

    try:
        handlers = build_handlers(settings, verbose, console_format)
    except OSError as e:
        sys.stderr.write(f"WARNING: Failed to open dosekit log file: {e}\n")
        handlers = build_handlers(
            settings.model_copy(update={"enabled": False}), verbose, console_format
        )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = propagate
    for handler in handlers:
        package_logger.addHandler(handler)
    _installed_handlers.extend(handlers)


def teardown_logging() -> None:
    """Remove and close the handlers installed by setup_logging()."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in _installed_handlers:
        package_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
