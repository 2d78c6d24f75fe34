from __future__ import annotations

import logging
import sys
import uuid
from dataclasses import dataclass, field
from pathlib import Path

from tabq_engine.infrastructure.observability.formatters import NdjsonFormatter, TextFormatter
from tabq_engine.infrastructure.observability.logger import EngineLogger
from tabq_engine.models.events import ENGINE_NAMESPACE


@dataclass
class LogContext:
    """Handlers attached for one session; ``close()`` detaches and closes them."""

    logger: EngineLogger
    handlers: list[logging.Handler] = field(default_factory=list)

    def close(self) -> None:
        while self.handlers:
            handler = self.handlers.pop()
            self.logger.logger.removeHandler(handler)
            handler.close()

    def __enter__(self) -> "LogContext":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()


def build_formatter(log_format: str | None) -> logging.Formatter:
    fmt = (log_format or "text").strip().lower()
    if fmt in ("ndjson", "json"):
        return NdjsonFormatter()
    if fmt == "text":
        return TextFormatter()
    raise ValueError(f"Unsupported log format {log_format!r}; use 'text' or 'ndjson'")


def create_logger_context(
    *,
    log_format: str = "text",
    log_level: int = logging.INFO,
    console: bool = True,
    log_file: Path | None = None,
    namespace: str = ENGINE_NAMESPACE,
) -> LogContext:
    """Create an isolated session logger writing to stderr and/or ``log_file``."""

    formatter = build_formatter(log_format)
    session_id = uuid.uuid4().hex

    base = logging.getLogger(f"tabq_engine.session.{session_id}")
    base.setLevel(log_level)
    base.propagate = False

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        base.addHandler(handler)

    return LogContext(EngineLogger(base, namespace=namespace, session_id=session_id), handlers)


__all__ = ["LogContext", "build_formatter", "create_logger_context"]
