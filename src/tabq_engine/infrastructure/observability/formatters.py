"""Log formatters: one JSON object per line, or a compact human-readable line."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from tabq_engine.models.events import DEFAULT_EVENT

_MAX_TEXT_VALUE = 80


def event_record(record: logging.LogRecord, formatter: logging.Formatter) -> dict[str, Any]:
    """Flatten a log record into the event shape shared by both formats."""

    timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
    out: dict[str, Any] = {
        "timestamp": timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "level": record.levelname.lower(),
        "event": getattr(record, "event", None) or DEFAULT_EVENT,
        "message": record.getMessage(),
        "session_id": getattr(record, "session_id", ""),
        "event_id": getattr(record, "event_id", ""),
    }

    data = getattr(record, "data", None)
    if isinstance(data, Mapping) and data:
        out["data"] = dict(data)

    if record.exc_info and record.exc_info[0] is not None:
        exc_type, exc, _ = record.exc_info
        out["error"] = {
            "type": exc_type.__name__,
            "message": str(exc),
            "stack_trace": formatter.formatException(record.exc_info),
        }
    return out


class NdjsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        return json.dumps(event_record(record, self), ensure_ascii=False, default=str, separators=(",", ":"))


class TextFormatter(logging.Formatter):
    """``<timestamp> <LEVEL> <event>[ - message] key=value ...``"""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        entry = event_record(record, self)
        line = f"{entry['timestamp']} {entry['level'].upper()} {entry['event']}"
        if entry["message"] and entry["message"] != entry["event"]:
            line += f" - {entry['message']}"

        for key, value in entry.get("data", {}).items():
            if key == "schema_version":
                continue
            text = str(value)
            if len(text) > _MAX_TEXT_VALUE:
                text = text[: _MAX_TEXT_VALUE - 3] + "..."
            line += f" {key}={text}"

        error = entry.get("error")
        if error:
            line += "\n" + error["stack_trace"].rstrip("\n")
        return line


__all__ = ["NdjsonFormatter", "TextFormatter", "event_record"]
