"""Logging utilities for bootmap.

Provides console logging for the CLI, timestamped file logging and
JSON-lines emission records.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Union

PathLike = Union[str, Path]

LOGGER_NAME = "bootmap"


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    COLORS = {
        "DEBUG": "\033[0;36m",  # Cyan
        "INFO": "\033[0;34m",  # Blue
        "WARNING": "\033[1;33m",  # Yellow
        "ERROR": "\033[0;31m",  # Red
        "CRITICAL": "\033[1;31m",  # Bold Red
        "RESET": "\033[0m",
    }

    def format(self, record):
        levelname = record.levelname
        color = self.COLORS.get(levelname, self.COLORS["RESET"])
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{levelname}{self.COLORS['RESET']}"
        return super().format(record)


def setup_console_logging(
    verbose: bool = False, debug: bool = False, color: bool | None = None
) -> logging.Logger:
    """Configure the ``bootmap`` logger for command-line use.

    Parameters
    ----------
    verbose : bool
        Log at INFO instead of WARNING.
    debug : bool
        Log at DEBUG (takes precedence over verbose).
    color : bool, optional
        Force colored level names. Defaults to whether stderr is a tty.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    level = logging.DEBUG if debug else (logging.INFO if verbose else logging.WARNING)
    if color is None:
        color = sys.stderr.isatty()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    formatter_cls = ColoredFormatter if color else logging.Formatter
    handler.setFormatter(
        formatter_cls(fmt="%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    return logger


def get_timestamped_log_path(log_path: PathLike) -> Path:
    """Insert the current local time before the suffix of log_path.

    Example: write.log -> write_20261019_080530.log
    """
    base = Path(log_path)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return base.with_name(f"{base.stem}_{stamp}{base.suffix or '.log'}")


def add_file_handler(
    logger: logging.Logger,
    log_path: PathLike,
    level: int = logging.INFO,
    timestamped: bool = False,
) -> Path:
    """Mirror ``logger`` into a log file next to the console output.

    The console handler keeps its own threshold; only the logger level is
    lowered so that records at ``level`` reach the file.

    Parameters
    ----------
    logger : logging.Logger
        Logger to attach to, usually the one from setup_console_logging.
    log_path : PathLike
        Log file. Appended to if it already exists.
    level : int
        Threshold for the file handler (default: INFO).
    timestamped : bool
        If True, write to a new timestamped file derived from log_path.

    Returns
    -------
    Path
        The file actually written to.
    """
    path = get_timestamped_log_path(log_path) if timestamped else Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(min(logger.getEffectiveLevel(), level))
    return path


def log_json(log_path: PathLike, record: dict[str, Any]) -> None:
    """Append a JSON line to log_path."""
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, default=str))
        handle.write("\n")
