"""Custom logging formatters."""
from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

# LogRecord attributes that are never copied as extra fields.
_RESERVED = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


class JSONFormatter(logging.Formatter):
    """Structured JSON Lines (JSONL) formatter with UTC timestamps.

    Example output:
        ```json
        {"level": "WARNING", "logger": "relay_pagination.core.pagination.connection", "message": "...", "timestamp": "2025-01-01T00:00:00.123Z"}
        ```
    """

    def __init__(self, static: dict[str, Any] | None = None) -> None:
        """Initialize JSON formatter.

        Args:
            static: Static fields to include in every log record (e.g., {"service": "api"}).
        """
        super().__init__()
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line."""
        data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
        }

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        data.update(self.static)

        # Extra fields (LoggerAdapter context, extra=...)
        for key, value in record.__dict__.items():
            if key not in _RESERVED and key not in data:
                data[key] = value

        # json.dumps escapes newlines, so each record stays on one line
        return json.dumps(data, ensure_ascii=False, default=str)
