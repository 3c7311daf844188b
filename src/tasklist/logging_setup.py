# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"
_MAX_LOG_BYTES = 2 * 1024 * 1024
_BACKUP_COUNT = 3


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive prompt readable.

    The console shares stderr with the task list output, so only lines a user can
    act on get through:
    - tasklist logs pass, except kv store chatter below WARNING (one line per snapshot write)
    - captured Python warnings and third-party logs pass only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("tasklist.storage."):
            return record.levelno >= logging.WARNING
        if name.startswith("tasklist."):
            return True

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/tasklist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console handler filtered for interactive use, plus a size-capped log file
    that keeps every snapshot write and hydration decision for debugging.

    Call once, before the store is hydrated. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    # Every mutation writes a full snapshot at DEBUG; cap the file.
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
