from __future__ import annotations

import logging
import sys
import time
from datetime import datetime, timezone
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_FILE_NAME = "ffcookies.log"
LOGGER_NAMESPACE = "ffcookies"


class UtcFormatter(logging.Formatter):
    """Formatter that renders timestamps in UTC using ISO-8601."""

    converter = time.gmtime

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(timespec="seconds")


def configure_logging(
    level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
    max_bytes: int = 5 * 1024 * 1024,  # 5 MB default
    backup_count: int = 3,
) -> Logger:
    """
    Configure the application logger with a stderr handler and, optionally,
    a rotating file handler.

    Standard output is reserved for cookie data, so the console handler
    always writes to stderr.

    Args:
        level: Logging level (default: WARNING)
        log_dir: Directory for the rotating log file, or None for console only
        max_bytes: Maximum size per log file before rotation (default: 5 MB)
        backup_count: Number of backup files to keep (default: 3)

    Returns:
        Configured application logger
    """
    formatter = UtcFormatter(
        fmt="%(asctime)sZ %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    root_logger = logging.getLogger(LOGGER_NAMESPACE)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.propagate = False

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / LOG_FILE_NAME
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        root_logger.debug("Logging configured. File: %s (max %d MB, %d backups)",
                          log_dir / LOG_FILE_NAME, max_bytes // (1024 * 1024), backup_count)
    return root_logger


def get_logger(name: Optional[str] = None) -> Logger:
    """Return a child logger under the application namespace."""
    base = logging.getLogger(LOGGER_NAMESPACE)
    if name:
        return base.getChild(name)
    return base
