"""Logging helpers.

Library modules only ever call :func:`get_logger`; handlers are installed by
the application (the CLI calls :func:`configure_logging`).
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Literal


LogFormat = Literal["text", "json"]

_CONSOLE_FMT = "%(asctime)s | %(name)-32s | %(levelname)-7s | %(message)s"
_ROOT = "graph_projector"


class JsonFormatter(logging.Formatter):
    """Outputs each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logger


def configure_logging(level: str = "WARNING", fmt: LogFormat = "text") -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Idempotent: calling it again replaces the previous handler.
    """
    root = logging.getLogger(_ROOT)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(_CONSOLE_FMT))
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
    return root


def reset_logging() -> None:
    """Undo :func:`configure_logging`, leaving the library silent again."""
    root = logging.getLogger(_ROOT)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(logging.NullHandler())
    root.setLevel(logging.NOTSET)
    root.propagate = True
