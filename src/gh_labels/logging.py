"""Structured logging configuration.

Uses standard library logging with a JSON formatter. Records go to stderr so
stdout stays free for `-version` output.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

_RESERVED_LOG_RECORD_ATTRS: set[str] = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}

_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "err": logging.ERROR,
    "error": logging.ERROR,
}

LOG_LEVEL_CHOICES = "debug|info|warn|err"


class JsonFormatter(logging.Formatter):
    """A minimal JSON formatter for logging records."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def parse_log_level(value: str) -> int | None:
    """Map a level name (debug|info|warn|err) to a logging level, or None."""

    return _LEVELS.get(value.strip().lower())


def configure_logging(level: str) -> None:
    """Configure root logging with structured JSON output.

    An unknown level is not fatal: it is reported and DEBUG is used instead.
    """

    root = logging.getLogger()

    # Remove any existing handlers to avoid duplicate logs when re-configuring.
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    parsed = parse_log_level(level)
    root.setLevel(parsed if parsed is not None else logging.DEBUG)
    if parsed is None:
        logging.getLogger(__name__).warning(
            "Unknown log level, using debug",
            extra={"log_level": level, "choices": LOG_LEVEL_CHOICES},
        )

    # Keep third-party loggers reasonably quiet unless explicitly configured.
    logging.getLogger("github").setLevel(max(root.level, logging.INFO))
    logging.getLogger("urllib3").setLevel(max(root.level, logging.INFO))
