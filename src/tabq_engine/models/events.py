"""Structured log events emitted by the engine.

Every ``engine.*`` event name must appear in :data:`ENGINE_EVENT_SCHEMAS`.
Events mapped to a model have their ``data`` validated strictly (no extra keys,
no type coercion) before the record is logged; events mapped to ``None`` carry
free-form data.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

ENGINE_NAMESPACE = "engine"
DEFAULT_EVENT = "log"

Count = Annotated[int, Field(ge=0)]


class EventPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: Literal[1] = 1


class OperationCompleted(EventPayload):
    operation: str
    kind: str
    row_count: Count
    returned_count: Count
    truncated: bool
    duration_ms: Annotated[float, Field(ge=0)]


class OperationFailed(EventPayload):
    operation: str
    error_kind: str
    parameter: str | None = None


class ColumnResolved(EventPayload):
    query: str
    header: str
    strategy: Literal["exact", "containment", "fuzzy"]
    distance: Count
    confidence: Annotated[float, Field(ge=0, le=1)]


class ValidateColumnUnresolved(EventPayload):
    column: str


class TableLoaded(EventPayload):
    source: str
    sheet_name: str | None = None
    row_count: Count
    column_count: Count


ENGINE_EVENT_SCHEMAS: dict[str, type[EventPayload] | None] = {
    f"{ENGINE_NAMESPACE}.{DEFAULT_EVENT}": None,
    f"{ENGINE_NAMESPACE}.settings.effective": None,
    f"{ENGINE_NAMESPACE}.table.loaded": TableLoaded,
    f"{ENGINE_NAMESPACE}.column.resolved": ColumnResolved,
    f"{ENGINE_NAMESPACE}.operation.completed": OperationCompleted,
    f"{ENGINE_NAMESPACE}.operation.failed": OperationFailed,
    f"{ENGINE_NAMESPACE}.validate.column_unresolved": ValidateColumnUnresolved,
}


__all__ = [
    "ColumnResolved",
    "DEFAULT_EVENT",
    "ENGINE_EVENT_SCHEMAS",
    "ENGINE_NAMESPACE",
    "EventPayload",
    "OperationCompleted",
    "OperationFailed",
    "TableLoaded",
    "ValidateColumnUnresolved",
]
