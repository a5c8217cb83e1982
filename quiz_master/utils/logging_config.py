"""Logging configuration helpers for the quiz application."""

from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path


def configure_logging(log_file: Path | None = None, level: int | str = logging.INFO) -> Logger:
    """Configure basic logging for the application and return the package logger.

    The terminal is the game surface, so records go to ``log_file`` when one
    is given instead of the console.
    """
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        filename=str(log_file) if log_file is not None else None,
        encoding="utf-8",
    )
    return logging.getLogger("quiz_master")
