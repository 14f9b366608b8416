"""Custom logging formatters."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

DEFAULT_KEYS = {
    "level": "levelname",
    "logger": "name",
    "message": "message",
}

# LogRecord attributes that are not copied into the JSON output as extras
_RESERVED_ATTRS = frozenset(
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
    },
)


def _utc_timestamp(created: float) -> str:
    stamp = datetime.fromtimestamp(created, tz=timezone.utc)
    return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _one_line(text: str) -> str:
    return text.replace("\n", "\\n")


class JSONFormatter(logging.Formatter):
    """JSON Lines formatter: one JSON object per record.

    Example output:
        ```json
        {"level": "DEBUG", "logger": "tsearch.core.database.search.coordinator", "message": "Planned simple search on Article: ...", "timestamp": "2025-01-01T00:00:00.123Z", "service": "tsearch", "entity": "Article", "mode": "simple"}
        ```

    Args:
        fmt_keys: Output key to LogRecord attribute mapping (DEFAULT_KEYS
            when omitted)
        static: Fields added to every record, e.g. ``{"service": "tsearch"}``
        max_length: Truncate longer messages (compiled search SQL can be
            large); no limit when None
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
        max_length: int | None = None,
    ) -> None:
        super().__init__()
        self.fmt_keys = dict(fmt_keys or DEFAULT_KEYS)
        self.static = dict(static or {})
        self.max_length = max_length

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if self.max_length is not None and len(message) > self.max_length:
            message = message[: self.max_length] + "..."
        record.message = message

        data: dict[str, Any] = {key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()}
        data["timestamp"] = _utc_timestamp(record.created)

        if record.exc_info:
            data["exception"] = _one_line(self.formatException(record.exc_info))
        if record.stack_info:
            data["stack_trace"] = _one_line(record.stack_info)

        data.update(self.static)
        data.update(self._extras(record, data))
        return json.dumps(data, ensure_ascii=False, default=str)

    @staticmethod
    def _extras(record: logging.LogRecord, data: dict[str, Any]) -> dict[str, Any]:
        """Fields passed through ``extra=`` (entity, mode, ...)."""
        return {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and key not in data
        }


__all__ = ["JSONFormatter"]
