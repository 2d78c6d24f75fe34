"""Query engine: dispatches named operations with typed parameters over a table."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.infrastructure.observability.logger import EngineLogger
from tabq_engine.infrastructure.settings import Settings
from tabq_engine.models.errors import InvalidParameterError, TabqEngineError, UnknownOperationError
from tabq_engine.models.params import (
    AggregateParams,
    FilterParams,
    MergeParams,
    OperationParams,
    PivotParams,
    PreviewParams,
    SortParams,
    ValidateParams,
)
from tabq_engine.models.results import MergeResult, OperationResult, TableDescription
from tabq_engine.models.table import Table
from tabq_engine.ops import aggregate, filter_rows, merge_tables, pivot, preview, sort_rows, validate
from tabq_engine.ops.shaping import ResultShaper


@dataclass(frozen=True)
class OperationSpec:
    name: str
    description: str
    params_model: type[OperationParams]
    handler: Callable[["QueryEngine", Table, Any], OperationResult]
    aliases: tuple[str, ...] = ()


OPERATIONS: dict[str, OperationSpec] = {}
_ALIASES: dict[str, str] = {}


def register_operation(spec: OperationSpec) -> OperationSpec:
    OPERATIONS[spec.name] = spec
    for alias in spec.aliases:
        _ALIASES[alias] = spec.name
    return spec


def get_operation(name: str) -> OperationSpec:
    key = (name or "").strip().lower()
    spec = OPERATIONS.get(_ALIASES.get(key, key))
    if spec is None:
        raise UnknownOperationError(
            f"Unknown operation: {name!r}. Known: {sorted(OPERATIONS)}",
            operation=name,
            parameter="operation",
        )
    return spec


def _result_counts(result: OperationResult) -> tuple[int, bool]:
    for attr in ("returned_rows", "total_groups", "total_issues"):
        value = getattr(result, attr, None)
        if isinstance(value, int):
            return value, bool(getattr(result, "truncated", False))
    return 1, False


class QueryEngine:
    """Entry point used by the orchestrator.

    Holds only immutable configuration (resolver, result shaper, settings), so
    one instance can serve concurrent calls over any number of tables.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        resolver: ColumnResolver | None = None,
        logger: EngineLogger | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.logger = logger or EngineLogger(logging.getLogger("tabq_engine"))
        self.resolver = resolver or ColumnResolver(self.settings.synonym_table(), logger=self.logger)
        self.shaper = ResultShaper(row_cap=self.settings.result_row_cap)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def execute(self, table: Table, operation: str, params: Mapping[str, Any] | BaseModel | None = None) -> OperationResult:
        spec = get_operation(operation)
        parsed = self._parse_params(spec, params)

        started = time.perf_counter()
        try:
            result = spec.handler(self, table, parsed)
        except TabqEngineError as exc:
            exc.operation = exc.operation or spec.name
            self.logger.event(
                "operation.failed",
                level=logging.WARNING,
                message=str(exc),
                data={"operation": spec.name, "error_kind": exc.kind.value, "parameter": exc.parameter},
            )
            raise

        returned, truncated = _result_counts(result)
        self.logger.event(
            "operation.completed",
            level=logging.DEBUG,
            data={
                "operation": spec.name,
                "kind": result.kind,
                "row_count": table.row_count,
                "returned_count": returned,
                "truncated": truncated,
                "duration_ms": round((time.perf_counter() - started) * 1000, 3),
            },
        )
        return result

    def _parse_params(self, spec: OperationSpec, params: Mapping[str, Any] | BaseModel | None) -> OperationParams:
        if isinstance(params, spec.params_model):
            return params
        if isinstance(params, BaseModel):
            params = params.model_dump(by_alias=True)
        try:
            return spec.params_model.model_validate(dict(params or {}))
        except ValidationError as exc:
            first = exc.errors()[0] if exc.errors() else {}
            loc = first.get("loc") or ()
            raise InvalidParameterError(
                f"Invalid parameters for {spec.name}: {exc.error_count()} error(s); {first.get('msg', '')}",
                operation=spec.name,
                parameter=str(loc[0]) if loc else None,
            ) from exc

    def tool_definitions(self) -> list[dict[str, Any]]:
        """Describe each operation as a tool for an LLM function-calling layer."""

        return [
            {
                "name": spec.name,
                "description": spec.description,
                "parameters": spec.params_model.model_json_schema(by_alias=True),
            }
            for spec in OPERATIONS.values()
        ]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def preview(self, table: Table, limit: int | None = None) -> OperationResult:
        return preview(table, limit, shaper=self.shaper, default_limit=self.settings.preview_default_limit)

    def filter(self, table: Table, column: str, operator: str, value: Any) -> OperationResult:
        return filter_rows(table, column, operator, value, resolver=self.resolver, shaper=self.shaper)

    def aggregate(self, table: Table, column: str, operation: str, group_by: str | None = None) -> OperationResult:
        return aggregate(table, column, operation, group_by, resolver=self.resolver, shaper=self.shaper)

    def sort(self, table: Table, column: str, order: str = "asc") -> OperationResult:
        return sort_rows(table, column, order, resolver=self.resolver, shaper=self.shaper)

    def pivot(self, table: Table, row_field: str, value_field: str, operation: str = "sum") -> OperationResult:
        return pivot(table, row_field, value_field, operation, resolver=self.resolver, shaper=self.shaper)

    def validate(self, table: Table, column: str | None = None) -> OperationResult:
        return validate(table, column, resolver=self.resolver, shaper=self.shaper, logger=self.logger)

    def merge(self, tables: Sequence[Table], merge_type: str = "union") -> MergeResult:
        try:
            params = MergeParams(merge_type=merge_type)
        except ValidationError as exc:
            raise InvalidParameterError(
                f"Unsupported merge type: {merge_type!r}", operation="merge", parameter="merge_type"
            ) from exc
        return merge_tables(tables, params.merge_type, shaper=self.shaper)

    def describe(self, table: Table) -> TableDescription:
        return TableDescription(
            name=table.name,
            headers=list(table.headers),
            canonical_headers=self.resolver.map_headers(table.headers),
            row_count=table.row_count,
            column_count=table.width,
        )


register_operation(
    OperationSpec(
        name="preview",
        description="Read and preview worksheet data: headers, the first rows and the total row count.",
        params_model=PreviewParams,
        handler=lambda engine, table, p: engine.preview(table, p.limit),
        aliases=("read_worksheet",),
    )
)
register_operation(
    OperationSpec(
        name="filter",
        description="Filter rows where a column matches a condition (at most 100 rows returned).",
        params_model=FilterParams,
        handler=lambda engine, table, p: engine.filter(table, p.column, p.operator, p.value),
        aliases=("filter_data",),
    )
)
register_operation(
    OperationSpec(
        name="aggregate",
        description="Compute sum, avg, count, min or max of a numeric column, optionally grouped by another column.",
        params_model=AggregateParams,
        handler=lambda engine, table, p: engine.aggregate(table, p.column, p.operation, p.group_by),
        aliases=("aggregate_data",),
    )
)
register_operation(
    OperationSpec(
        name="sort",
        description="Sort rows by a column (at most 100 rows returned).",
        params_model=SortParams,
        handler=lambda engine, table, p: engine.sort(table, p.column, p.order),
        aliases=("sort_data",),
    )
)
register_operation(
    OperationSpec(
        name="pivot",
        description="Create a pivot summary: one record per distinct row-field value.",
        params_model=PivotParams,
        handler=lambda engine, table, p: engine.pivot(table, p.row_field, p.value_field, p.operation),
        aliases=("pivot_table",),
    )
)
register_operation(
    OperationSpec(
        name="validate",
        description="Check data quality: blank-cell counts per column, or a detailed report for one column.",
        params_model=ValidateParams,
        handler=lambda engine, table, p: engine.validate(table, p.column),
        aliases=("data_validation",),
    )
)


__all__ = ["OPERATIONS", "OperationSpec", "QueryEngine", "get_operation", "register_operation"]
