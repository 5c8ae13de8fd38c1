"""Logging setup helpers for the terminal deck."""
from __future__ import annotations

import logging
import sys
from logging import Logger
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str, log_file: Optional[Path], *, console_level: str = "WARNING") -> Logger:
    """Configure root logger with a stderr handler and an optional file handler.

    The console handler never goes below ``console_level`` so that log records
    do not interleave with frames drawn on stdout.
    """
    resolved_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger()
    logger.setLevel(resolved_level)

    # Clear existing handlers to avoid duplicate logs during repeated runs
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(max(resolved_level, getattr(logging, console_level.upper(), logging.WARNING)))
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(resolved_level)
        logger.addHandler(file_handler)

    logger.debug("Logging configured", extra={"level": level, "file": str(log_file)})
    return logger


def get_logger(name: Optional[str] = None) -> Logger:
    """Return a module-level logger."""
    return logging.getLogger(name)
