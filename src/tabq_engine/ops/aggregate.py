from __future__ import annotations

import math

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.models.errors import InvalidParameterError
from tabq_engine.models.results import AggregateResult, GroupedAggregateResult, GroupResult
from tabq_engine.models.table import Table
from tabq_engine.ops.base import numeric_values, reduce_numbers, require_column
from tabq_engine.ops.coercion import stringify, to_number
from tabq_engine.ops.shaping import ResultShaper

AGGREGATE_OPERATIONS = ("sum", "avg", "count", "min", "max")


def aggregate(
    table: Table,
    column: str,
    operation: str,
    group_by: str | None = None,
    *,
    resolver: ColumnResolver,
    shaper: ResultShaper,
) -> AggregateResult | GroupedAggregateResult:
    """Reduce the numeric cells of ``column``, optionally per distinct ``group_by`` value.

    Only numeric-coercible cells take part, so ``count`` counts numbers, not rows.
    Grouped results keep every group in first-appearance order, including groups
    without a single numeric value (``count`` 0, undefined reductions as ``None``).
    """

    if operation not in AGGREGATE_OPERATIONS:
        raise InvalidParameterError(
            f"Unsupported aggregation: {operation!r}", operation="aggregate", parameter="operation"
        )
    idx = require_column(resolver, table, column, operation="aggregate")

    if not group_by:
        numbers = numeric_values(table.column(idx))
        return AggregateResult(
            operation="aggregate",
            parameters=shaper.parameters(column=table.headers[idx], operation=operation),
            result=reduce_numbers(numbers, operation),
            count=len(numbers),
        )

    group_idx = require_column(resolver, table, group_by, operation="aggregate", parameter="group_by")

    groups: dict[str, list[float]] = {}
    for row in table.rows:
        bucket = groups.setdefault(stringify(table.cell(row, group_idx)), [])
        n = to_number(table.cell(row, idx))
        if not math.isnan(n):
            bucket.append(n)

    results = [
        GroupResult(group=key, result=reduce_numbers(numbers, operation), count=len(numbers))
        for key, numbers in groups.items()
    ]
    return GroupedAggregateResult(
        operation="aggregate",
        parameters=shaper.parameters(
            column=table.headers[idx],
            operation=operation,
            group_by=table.headers[group_idx],
        ),
        groups=results,
        total_groups=len(results),
    )


__all__ = ["AGGREGATE_OPERATIONS", "aggregate"]
