"""Typed parameter bundles for each table operation.

Field aliases follow the camelCase names the tool-calling layer sends
(``groupBy``, ``rowField`` ...); snake_case names are accepted too.
"""

from __future__ import annotations

from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

FilterOperator: TypeAlias = Literal[">", "<", ">=", "<=", "=", "!=", "contains"]
AggregateOperation: TypeAlias = Literal["sum", "avg", "count", "min", "max"]
PivotOperation: TypeAlias = Literal["sum", "count", "avg"]
SortOrder: TypeAlias = Literal["asc", "desc"]
MergeType: TypeAlias = Literal["union", "intersection"]
FilterValue: TypeAlias = bool | int | float | str | None


class OperationParams(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True, coerce_numbers_to_str=True)


class PreviewParams(OperationParams):
    limit: int | None = Field(default=None, description="Number of rows to preview (default: 10)")


class FilterParams(OperationParams):
    column: str = Field(description="Column name to filter")
    operator: FilterOperator
    value: FilterValue = Field(default=None, description="Value to filter by")

    @field_validator("operator", mode="before")
    @classmethod
    def _normalize_operator(cls, value: object) -> object:
        if isinstance(value, str):
            text = value.strip().lower()
            return "=" if text == "==" else text
        return value


class AggregateParams(OperationParams):
    column: str = Field(description="Column to aggregate")
    operation: AggregateOperation
    group_by: str | None = Field(default=None, alias="groupBy", description="Column to group by")


class SortParams(OperationParams):
    column: str = Field(description="Column to sort by")
    order: SortOrder = "asc"


class PivotParams(OperationParams):
    row_field: str = Field(alias="rowField", description="Field for rows")
    value_field: str = Field(alias="valueField", description="Field for values")
    operation: PivotOperation = "sum"


class ValidateParams(OperationParams):
    column: str | None = Field(default=None, description="Specific column to validate")


class MergeParams(OperationParams):
    merge_type: MergeType = Field(default="union", alias="mergeType")


__all__ = [
    "AggregateOperation",
    "AggregateParams",
    "FilterOperator",
    "FilterParams",
    "FilterValue",
    "MergeParams",
    "MergeType",
    "OperationParams",
    "PivotOperation",
    "PivotParams",
    "PreviewParams",
    "SortOrder",
    "SortParams",
    "ValidateParams",
]
