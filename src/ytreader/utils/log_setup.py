"""Logging configuration for the ytreader CLI.

Modules log through ``logging.getLogger(__name__)``; handlers are attached
once, here, to the ``ytreader`` package logger.
"""

from __future__ import annotations

import logging
from pathlib import Path

TRACE = 5
"""Level below DEBUG used for per-request fetch tracing."""

logging.addLevelName(TRACE, "TRACE")

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Attach console (and optionally file) handlers to the ``ytreader`` logger.

    Parameters
    ----------
    level : str, optional
        Level name, including ``"TRACE"`` (default "INFO").
    log_file : Path | None, optional
        When set, also write records to this file, creating parent
        directories as needed (default None).
    """
    log_level = TRACE if level.upper() == "TRACE" else logging.getLevelName(level.upper())

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    root_logger = logging.getLogger("ytreader")
    root_logger.setLevel(log_level)

    # Drop handlers left by a previous call
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
