"""Operation result models.

Every result is a frozen pydantic model tagged by ``kind`` and carries the
operation name plus the parameters actually used (resolved header names, the
operator/order/operation values) so consumers can render or export without
re-deriving them. ``to_payload()`` produces the camelCase JSON shape forwarded
to the orchestrator.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Row: TypeAlias = list[Any]


class ResultModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class _OperationResult(ResultModel):
    operation: str
    parameters: dict[str, Any] = Field(default_factory=dict)


class PreviewResult(_OperationResult):
    kind: Literal["preview"] = "preview"
    headers: list[str]
    rows: list[Row]
    total_rows: int
    returned_rows: int
    truncated: bool


class FilterResult(_OperationResult):
    kind: Literal["filtered"] = "filtered"
    rows: list[Row]
    total_matches: int
    returned_rows: int
    truncated: bool


class AggregateResult(_OperationResult):
    kind: Literal["aggregated"] = "aggregated"
    result: float | None
    count: int


class GroupResult(ResultModel):
    group: str
    result: float | None
    count: int


class GroupedAggregateResult(_OperationResult):
    kind: Literal["grouped_aggregated"] = "grouped_aggregated"
    groups: list[GroupResult]
    total_groups: int


class SortResult(_OperationResult):
    kind: Literal["sorted"] = "sorted"
    rows: list[Row]
    total_rows: int
    returned_rows: int
    truncated: bool


class PivotResult(_OperationResult):
    kind: Literal["pivoted"] = "pivoted"
    records: list[dict[str, Any]]
    total_groups: int


class ColumnIssue(ResultModel):
    column: str
    null_count: int
    null_percentage: float
    unique_count: int | None = None
    total_count: int | None = None


class ValidationReport(_OperationResult):
    kind: Literal["validation_report"] = "validation_report"
    issues: list[ColumnIssue]
    total_issues: int


class MergeResult(_OperationResult):
    kind: Literal["merged"] = "merged"
    headers: list[str]
    rows: list[Row]
    source_tables: list[str]
    total_rows: int


class TableDescription(ResultModel):
    name: str | None
    headers: list[str]
    canonical_headers: list[str]
    row_count: int
    column_count: int


OperationResult: TypeAlias = Annotated[
    PreviewResult
    | FilterResult
    | AggregateResult
    | GroupedAggregateResult
    | SortResult
    | PivotResult
    | ValidationReport
    | MergeResult,
    Field(discriminator="kind"),
]


__all__ = [
    "AggregateResult",
    "ColumnIssue",
    "FilterResult",
    "GroupResult",
    "GroupedAggregateResult",
    "MergeResult",
    "OperationResult",
    "PivotResult",
    "PreviewResult",
    "ResultModel",
    "Row",
    "SortResult",
    "TableDescription",
    "ValidationReport",
]
