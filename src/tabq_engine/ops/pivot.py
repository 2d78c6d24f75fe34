from __future__ import annotations

import math
from typing import Any

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.models.errors import InvalidParameterError
from tabq_engine.models.results import PivotResult
from tabq_engine.models.table import Table
from tabq_engine.ops.base import reduce_numbers, require_column
from tabq_engine.ops.coercion import stringify, to_number
from tabq_engine.ops.shaping import ResultShaper

PIVOT_OPERATIONS = ("sum", "count", "avg")


def pivot(
    table: Table,
    row_field: str,
    value_field: str,
    operation: str = "sum",
    *,
    resolver: ColumnResolver,
    shaper: ResultShaper,
) -> PivotResult:
    """Summarize ``value_field`` per distinct ``row_field`` value.

    Only rows with a numeric value contribute, so a key whose rows are all
    non-numeric does not appear. The number of groups is not capped.

    Each record is keyed by the row header, except when that header is
    ``count`` or the operation name; the group value then goes under
    ``<header>_group`` so the summary fields are not overwritten.
    """

    if operation not in PIVOT_OPERATIONS:
        raise InvalidParameterError(f"Unsupported pivot operation: {operation!r}", operation="pivot", parameter="operation")

    row_idx = require_column(resolver, table, row_field, operation="pivot", parameter="row_field")
    value_idx = require_column(resolver, table, value_field, operation="pivot", parameter="value_field")
    row_header = table.headers[row_idx]
    row_key = f"{row_header}_group" if row_header in (operation, "count") else row_header

    buckets: dict[str, list[float]] = {}
    for row in table.rows:
        n = to_number(table.cell(row, value_idx))
        if math.isnan(n):
            continue
        buckets.setdefault(stringify(table.cell(row, row_idx)), []).append(n)

    records: list[dict[str, Any]] = [
        {row_key: key, operation: reduce_numbers(numbers, operation), "count": len(numbers)}
        for key, numbers in buckets.items()
    ]
    return PivotResult(
        operation="pivot",
        parameters=shaper.parameters(row_field=row_header, value_field=table.headers[value_idx], operation=operation),
        records=records,
        total_groups=len(records),
    )


__all__ = ["PIVOT_OPERATIONS", "pivot"]
