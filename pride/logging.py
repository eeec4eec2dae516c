"""Logging utilities for pride commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "pride"
_CONSOLE_FORMAT = "[pride] %(levelname)s %(message)s"
_VERBOSE_CONSOLE_FORMAT = "[pride:%(component)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the pride hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class _ComponentFilter(logging.Filter):
    """Exposes the logger name below `pride.` as `%(component)s`."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = f"{_LOGGER_NAME}."
        record.component = (
            record.name[len(prefix):] if record.name.startswith(prefix) else record.name
        )
        return True


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure console output and an optional log file for pride.

    The console follows `verbose`/`quiet` (`verbose` wins). A log file always
    records debug detail so failed runs can be diagnosed after the fact.
    """
    console_level = _resolve_level(verbose=verbose, quiet=quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.addFilter(_ComponentFilter())
    console.setFormatter(
        logging.Formatter(_VERBOSE_CONSOLE_FORMAT if verbose else _CONSOLE_FORMAT)
    )
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def _resolve_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


__all__ = ["configure_logging", "get_logger"]
