from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Sequence

# Structured fields copied from LogRecord extras into the JSON payload.
_EXTRA_FIELDS = (
    "entity_kind",
    "outcome",
    "error_count",
    "field_paths",
    "latency_ms",
    "status_code",
    "attempt",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    if root.handlers:
        for handler in root.handlers:
            handler.setFormatter(JsonFormatter())
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


def log_validation_event(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    entity_kind: str,
    outcome: str,
    error_count: int | None = None,
    field_paths: Sequence[str] | None = None,
    latency_ms: int | None = None,
    status_code: int | None = None,
) -> None:
    """Log one validation or submission outcome. Field values are never logged."""
    extra: dict[str, Any] = {"entity_kind": entity_kind, "outcome": outcome}
    if error_count is not None:
        extra["error_count"] = error_count
    if field_paths is not None:
        extra["field_paths"] = list(field_paths)
    if latency_ms is not None:
        extra["latency_ms"] = latency_ms
    if status_code is not None:
        extra["status_code"] = status_code
    logger.log(level, message, extra=extra)
