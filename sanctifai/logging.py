"""
Structured Logging

Every sanctifai logger lives under the "sanctifai" namespace and writes
one line per record: JSON in production, plain text for local runs.
Context goes in through `extra=`; only the keys in EXTRA_FIELDS are
carried into the JSON line.

Usage:
    from sanctifai.logging import get_logger
    logger = get_logger("analyzer")
    logger.info("Analysis complete", extra={"total": 30, "hits_count": 2})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Iterable, Optional

from sanctifai.config import settings

NAMESPACE = "sanctifai"

EXTRA_FIELDS = (
    # scoring
    "total", "raw_total", "band", "hits_count", "rule_id",
    # media analysis
    "media_type", "title", "cached",
    # requests and failures
    "method", "path", "status_code", "duration_ms", "error", "error_type",
    # startup
    "rules_count", "rules_source",
)

# Libraries whose INFO chatter drowns out analysis logs
QUIET_LOGGERS = ("uvicorn.access", "httpx", "google_genai")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with whitelisted extras."""

    def __init__(self, fields: Iterable[str] = EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in self.fields:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        if record.levelno >= logging.ERROR:
            entry["location"] = f"{record.module}:{record.lineno}"
        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        )


def setup_logging(
    fmt: Optional[str] = None,
    level: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """
    Attach a single handler to the sanctifai logger.

    Safe to call more than once: earlier handlers are replaced. Defaults
    come from SANCTIFAI_LOG_FORMAT and SANCTIFAI_LOG_LEVEL.
    """
    fmt = fmt or settings.LOG_FORMAT
    level = (level or settings.LOG_LEVEL).upper()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())

    root = logging.getLogger(NAMESPACE)
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level, logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{NAMESPACE}.{name}")
