"""Logging setup for the resolve command."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

# Resolution context attached through ``extra=``; emitted only when present.
CONTEXT_FIELDS = ("location", "category", "provider")


class ResolutionLogFormatter(logging.Formatter):
    """One JSON object per line, carrying the resolution context of the record."""

    def format(self, record: logging.LogRecord) -> str:
        event: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                event[field] = value
        if record.exc_info:
            event["exception"] = self.formatException(record.exc_info)
        return json.dumps(event, default=str, ensure_ascii=False)


def setup_logger(name: str = "saytime_weather", level: int | str = logging.INFO) -> logging.Logger:
    """Configure the package logger to write to stderr; repeated calls reuse the handler."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(ResolutionLogFormatter())
    logger.addHandler(handler)
    return logger
