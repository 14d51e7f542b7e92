"""
Structured Logging

Every module logs under the "quantummind" namespace. setup_logging()
attaches one stdout handler to that namespace, formatted either as
JSON lines (production) or readable text (development).

Known context fields passed through `extra=` (risk_score, mode,
duration_ms, ...) are copied into the output in both formats.

Usage:
    from quantummind.logging import get_logger
    logger = get_logger("api")
    logger.info("Analysis complete", extra={"risk_score": 40, "platform": "gmail"})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Optional

NAMESPACE = "quantummind"

LOG_LEVEL = os.getenv("QUANTUMMIND_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("QUANTUMMIND_LOG_FORMAT", "json")  # "json" or "text"

EXTRA_FIELDS = (
    "risk_score", "platform", "mode", "matches_count", "coherence",
    "signal_source", "cached", "error", "error_type", "duration_ms",
    "status_code", "method", "path", "version",
)

_QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx", "google_genai")


def record_extras(record: logging.LogRecord) -> dict:
    """The known context fields set on a record, in EXTRA_FIELDS order."""
    extras = {}
    for name in EXTRA_FIELDS:
        value = getattr(record, name, None)
        if value is not None:
            extras[name] = value
    return extras


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_extras(record),
        }
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """`time [LEVEL] logger: message key=value ...`"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        pairs = " ".join(f"{k}={v}" for k, v in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {pairs}{sep}{tail}"


_FORMATTERS = {"json": JSONFormatter, "text": TextFormatter}


def setup_logging(
    fmt: str = LOG_FORMAT,
    level: str = LOG_LEVEL,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Configure the package logger. Safe to call more than once."""
    logger = logging.getLogger(NAMESPACE)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_FORMATTERS.get(fmt.lower(), JSONFormatter)())
    logger.handlers[:] = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Named logger under the quantummind namespace."""
    return logging.getLogger(f"{NAMESPACE}.{name}")
