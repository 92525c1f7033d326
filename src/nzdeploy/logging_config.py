"""Logging configuration for nzdeploy."""

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "NZDEPLOY_LOG_LEVEL"
LOG_FILE_ENV = "NZDEPLOY_LOG_FILE"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggingConfigError(Exception):
    """Raised when the logging environment variables are invalid."""


def setup_logging(console: bool = True) -> None:
    """Set up logging based on environment variables.

    Env vars:
        NZDEPLOY_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: disabled)
        NZDEPLOY_LOG_FILE: Log file path (default: no file)

    ``console`` adds a Rich handler on stderr.  The TUI passes False because
    anything written to the terminal would corrupt the screen; it only logs
    to the file.
    """
    logger = logging.getLogger("nzdeploy")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())

    level_name = os.getenv(LOG_LEVEL_ENV)
    if not level_name:
        return  # logging disabled unless explicitly set

    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise LoggingConfigError(f"Invalid log level: {level_name}")
    logger.setLevel(level)

    if console:
        logger.addHandler(
            RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_level=True,
                show_path=False,
                rich_tracebacks=True,
            )
        )

    log_file_str = os.getenv(LOG_FILE_ENV)
    if log_file_str:
        log_file = Path(log_file_str).expanduser()
        if log_file.is_dir():
            raise LoggingConfigError(f"Log file path {log_file} is a directory, not a file.")
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(file_handler)
