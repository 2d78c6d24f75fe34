"""Event-aware logger adapter used throughout the engine."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from tabq_engine.models.events import DEFAULT_EVENT, ENGINE_EVENT_SCHEMAS, ENGINE_NAMESPACE


def _strip_dots(value: str | None) -> str:
    return (value or "").strip().strip(".")


def qualify_event_name(name: str, namespace: str) -> str:
    """Prefix ``name`` with ``namespace`` unless it already carries it.

    ``qualify_event_name("table.loaded", "engine") == "engine.table.loaded"``
    """
    event = _strip_dots(name)
    ns = _strip_dots(namespace)
    if not ns:
        return event or "invalid_event"
    if not event:
        return f"{ns}.invalid_event"
    if event == ns or event.startswith(f"{ns}."):
        return event
    return f"{ns}.{event}"


def validate_event_payload(event: str, payload: dict[str, Any]) -> dict[str, Any]:
    """Check ``payload`` against the schema registered for ``event``.

    Events outside the engine namespace pass through untouched. Unregistered
    engine events and payloads that fail strict validation raise ``ValueError``.
    """
    if event.split(".", 1)[0] != ENGINE_NAMESPACE:
        return payload

    try:
        schema = ENGINE_EVENT_SCHEMAS[event]
    except KeyError:
        raise ValueError(f"Unknown engine event '{event}'; register it in ENGINE_EVENT_SCHEMAS") from None

    if schema is None:
        return payload
    try:
        return schema.model_validate(payload, strict=True).model_dump()
    except ValidationError as exc:
        raise ValueError(f"Invalid payload for event '{event}': {exc}") from exc


class EngineLogger(logging.LoggerAdapter):
    """Tags every record with ``session_id``, ``event_id`` and ``event``.

    Plain calls (``logger.info(...)``) are recorded as ``<namespace>.log``;
    :meth:`event` logs a named domain event with a validated ``data`` payload.
    """

    def __init__(
        self,
        logger: logging.Logger,
        *,
        namespace: str = ENGINE_NAMESPACE,
        session_id: str | None = None,
    ) -> None:
        super().__init__(logger, {})
        self.namespace = _strip_dots(namespace)
        self.session_id = session_id or uuid.uuid4().hex

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = kwargs.get("extra")
        if extra is not None and not isinstance(extra, Mapping):
            raise TypeError("logging 'extra' must be a mapping")

        fields = dict(extra or {})
        fields.setdefault("event", qualify_event_name(DEFAULT_EVENT, self.namespace))
        fields.setdefault("event_id", uuid.uuid4().hex)
        fields["session_id"] = self.session_id
        kwargs["extra"] = fields
        return msg, kwargs

    def event(
        self,
        name: str,
        *,
        message: str | None = None,
        level: int = logging.INFO,
        data: Mapping[str, Any] | None = None,
        exc: BaseException | None = None,
    ) -> None:
        if not self.isEnabledFor(level):
            return

        event = qualify_event_name(name, self.namespace)
        payload = validate_event_payload(event, dict(data or {}))

        extra: dict[str, Any] = {"event": event}
        if payload:
            extra["data"] = payload
        self.log(level, message or event, extra=extra, exc_info=exc)


class NullLogger(EngineLogger):
    """Discards every record. Falsy, so ``if logger:`` skips optional work."""

    def __init__(self) -> None:
        sink = logging.Logger("tabq_engine.null")
        sink.disabled = True
        sink.propagate = False
        super().__init__(sink, session_id="null")

    def __bool__(self) -> bool:
        return False


__all__ = ["EngineLogger", "NullLogger", "qualify_event_name", "validate_event_payload"]
