"""Shared logger for EventDesk.

Modules log with ``extra={...}`` for request ids, counts and errors. The
formatter appends those fields as ``key=value`` pairs after the message so
they reach the console instead of being dropped.
"""
from __future__ import annotations

import logging
import os

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS
        }
        if not extras:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{line} | {pairs}"


def _create_logger() -> logging.Logger:
    logger = logging.getLogger("eventdesk")
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        ExtraFormatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logger.setLevel(_LOG_LEVEL)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


logger = _create_logger()
