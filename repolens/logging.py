"""Diagnostics for repolens runs.

Reports go to stdout (or ``--output``), so every log record is routed to
stderr or an explicit log file and never mixes with the rendered report.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

_ROOT = "repolens"
_CONSOLE_FORMAT = "[%(subsystem)s] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for one subsystem, e.g. ``get_logger("index")``."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


class _ConsoleFormatter(logging.Formatter):
    """Prefixes records with ``[repolens]``, or ``[repolens.<subsystem>]`` when verbose."""

    def __init__(self, show_subsystem: bool) -> None:
        super().__init__(_CONSOLE_FORMAT)
        self._show_subsystem = show_subsystem

    def format(self, record: logging.LogRecord) -> str:
        record.subsystem = record.name if self._show_subsystem else _ROOT
        return super().format(record)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Install the repolens handlers, replacing any from an earlier call.

    Console output goes to ``stream`` (stderr by default). ``verbose`` lowers
    the threshold to DEBUG, which surfaces per-file read failures and
    sampling decisions, and tags each line with the emitting subsystem.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_ROOT)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(level)
    console.setFormatter(_ConsoleFormatter(show_subsystem=verbose))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
