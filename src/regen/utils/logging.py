"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide helper to obtain package loggers.
    - Allow optional verbose/debug mode for the CLI.

Public contracts:
    - `get_logger(name)`: Return a logger nested under the ``regen`` namespace.
    - `configure_logging(verbose)`: Attach a stderr handler to the package logger ``regen``.

Notes/Edge cases:
    - Configuration is idempotent; repeated calls only adjust the level.
    - Random draws and generated text are never logged.
"""

from __future__ import annotations

import logging
import sys

__all__ = ["get_logger", "configure_logging"]

_ROOT = "regen"
_FORMAT = "%(levelname)s %(name)s: %(message)s"


class _StderrHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Stream handler that always writes to the current ``sys.stderr``."""

    def emit(self, record: logging.LogRecord) -> None:
        # Test runners swap sys.stderr between invocations.
        self.stream = sys.stderr
        super().emit(record)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for ``name`` under the package namespace."""

    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT}.{name}")


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package root logger for command line use."""

    logger = logging.getLogger(_ROOT)
    if not any(isinstance(h, _StderrHandler) for h in logger.handlers):
        handler = _StderrHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
