# ChronoMed
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Logging configuration with file rotation."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

__all__ = ["setup_logging", "get_log_directory"]

_PACKAGE_LOGGER = "chronomed"


def setup_logging(
    console_level: int = logging.WARNING,
    log_dir: Path | None = None,
    *,
    app_name: str = "ChronoMed",
    to_file: bool = True,
) -> Path | None:
    """
    Configure the ``chronomed`` logger.

    Creates two log files when ``to_file`` is set:
    - chronomed.log: DEBUG+ messages (10 MB per file, 5 rotations)
    - errors.log: ERROR+ messages only (5 MB per file, 3 rotations)

    Args:
        console_level: Minimum level for console output (stderr)
        log_dir: Directory for log files; platform default when omitted
        app_name: Application name for the default log directory
        to_file: Disable to log to the console only

    Returns:
        The log directory, or ``None`` when file logging is off or unavailable
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    # Calling twice must not duplicate handlers.
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    detailed_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    package_logger.addHandler(console_handler)

    if not to_file:
        return None

    directory = Path(log_dir) if log_dir is not None else _get_log_directory(app_name)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        package_logger.warning("File logging disabled; cannot create %s: %s", directory, exc)
        return None

    app_handler = RotatingFileHandler(
        directory / "chronomed.log",
        maxBytes=10 * 1024 * 1024,  # 10 MB
        backupCount=5,
        encoding="utf-8",
    )
    app_handler.setLevel(logging.DEBUG)
    app_handler.setFormatter(detailed_formatter)
    package_logger.addHandler(app_handler)

    error_handler = RotatingFileHandler(
        directory / "errors.log",
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    package_logger.addHandler(error_handler)

    log = logging.getLogger(__name__)
    log.debug("%s logging initialized in %s", app_name, directory)
    log.debug("Platform: %s, Python: %s", sys.platform, sys.version.split()[0])
    return directory


def _get_log_directory(app_name: str) -> Path:
    """
    Get platform-specific log directory.

    - Windows: %LOCALAPPDATA%\\AppName\\logs
    - macOS: ~/Library/Logs/AppName
    - Linux: ~/.local/share/AppName/logs
    """
    home = Path.home()

    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", home / "AppData" / "Local"))
        return base / app_name / "logs"

    elif sys.platform == "darwin":
        return home / "Library" / "Logs" / app_name

    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", home / ".local" / "share")
        return Path(xdg_data_home) / app_name / "logs"


def get_log_directory(app_name: str = "ChronoMed") -> Path:
    """Get the log directory path without setting up logging."""

    return _get_log_directory(app_name)
