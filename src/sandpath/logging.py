"""Logging setup for the ``sandpath`` logger hierarchy.

Validation rejections are reported on ``sandpath.validator`` at WARNING. When a
log file is given the package logger writes there only (no propagation);
repeated calls never stack duplicate handlers.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sandpath.config import LogLevel

LOGGER_NAME = "sandpath"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    log_level: LogLevel | str = LogLevel.WARNING,
    *,
    log_file: Path | str | None = None,
) -> logging.Logger:
    """Configure and return the package logger."""

    logger = logging.getLogger(LOGGER_NAME)
    level_value = _to_logging_level(log_level)
    logger.setLevel(level_value)
    logger.propagate = log_file is None

    if log_file is None:
        return logger

    path = Path(log_file)
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(path):
            handler.setLevel(level_value)
            return logger

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level_value)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def _to_logging_level(value: LogLevel | str) -> int:
    mapping = {
        LogLevel.DEBUG: logging.DEBUG,
        LogLevel.INFO: logging.INFO,
        LogLevel.WARNING: logging.WARNING,
        LogLevel.ERROR: logging.ERROR,
    }
    if isinstance(value, LogLevel):
        return mapping[value]
    if isinstance(value, str):
        try:
            return mapping[LogLevel(value.lower())]
        except ValueError:
            return logging.WARNING
    return logging.WARNING


__all__ = [
    "LOGGER_NAME",
    "configure_logging",
    "_to_logging_level",
]
