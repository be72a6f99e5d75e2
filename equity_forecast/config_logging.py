"""Logging configuration for the project."""

from __future__ import annotations

import logging
import sys

# Third-party loggers that are chatty at INFO level
_NOISY_LOGGERS = ("yfinance", "matplotlib", "peewee", "urllib3")


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging to stdout and quiet noisy third-party loggers.

    Args:
        level: Logging level, as a number or a name such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Get a logger for ``name``, configuring logging on first use."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        setup_logging()
    return logger
