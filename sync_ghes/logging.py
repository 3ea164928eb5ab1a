"""Logger setup for sync-ghes runs.

Child process output (git, rm) is streamed straight to stdout/stderr by
``sync_ghes.process`` and never goes through these handlers; log lines are
prefixed so they stay distinguishable from that output.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "sync_ghes"
_CONSOLE_FORMAT = "[sync-ghes] %(levelname)s %(message)s"
# Verbose runs name the emitting component, e.g. "workflows.checker".
_VERBOSE_CONSOLE_FORMAT = "[sync-ghes] %(levelname)s %(component)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(component)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Adds ``record.component``: the logger name relative to sync_ghes."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith(f"{_LOGGER_NAME}."):
            name = name[len(_LOGGER_NAME) + 1 :]
        record.component = name
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def reset_logging() -> logging.Logger:
    """Detach and close every handler installed by configure_logging."""
    logger = logging.getLogger(_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    return logger


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (and optional file) handlers on the sync_ghes logger.

    Safe to call repeatedly: previous handlers are closed first.
    """
    logger = reset_logging()
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    component = _ComponentFilter()
    console = logging.StreamHandler()
    console.setLevel(level)
    console.addFilter(component)
    console.setFormatter(
        logging.Formatter(_VERBOSE_CONSOLE_FORMAT if verbose else _CONSOLE_FORMAT)
    )
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        # The file always records debug detail, whatever the console level.
        logger.setLevel(logging.DEBUG)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(component)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger", "reset_logging"]
