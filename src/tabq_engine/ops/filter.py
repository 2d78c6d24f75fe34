from __future__ import annotations

import math
from typing import Any, Callable

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.models.errors import InvalidParameterError
from tabq_engine.models.results import FilterResult
from tabq_engine.models.table import Table
from tabq_engine.ops.base import require_column
from tabq_engine.ops.coercion import loose_equals, stringify, to_number
from tabq_engine.ops.shaping import ResultShaper

Predicate = Callable[[Any], bool]

_NUMERIC_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    ">": lambda a, b: a > b,
    "<": lambda a, b: a < b,
    ">=": lambda a, b: a >= b,
    "<=": lambda a, b: a <= b,
}


def build_predicate(operator: str, value: Any) -> Predicate:
    """Compile ``operator``/``value`` into a cell predicate.

    Numeric operators never match a non-numeric cell (NaN compares false).
    """

    compare = _NUMERIC_OPERATORS.get(operator)
    if compare is not None:
        target = to_number(value)

        def numeric(cell: Any) -> bool:
            n = to_number(cell)
            if math.isnan(n) or math.isnan(target):
                return False
            return compare(n, target)

        return numeric

    if operator == "=":
        return lambda cell: loose_equals(cell, value)
    if operator == "!=":
        return lambda cell: not loose_equals(cell, value)
    if operator == "contains":
        needle = stringify(value).lower()
        return lambda cell: needle in stringify(cell).lower()

    raise InvalidParameterError(f"Unsupported filter operator: {operator!r}", operation="filter", parameter="operator")


def filter_rows(
    table: Table,
    column: str,
    operator: str,
    value: Any,
    *,
    resolver: ColumnResolver,
    shaper: ResultShaper,
) -> FilterResult:
    idx = require_column(resolver, table, column, operation="filter")
    predicate = build_predicate(operator, value)

    matches = [list(row) for row in table.rows if predicate(table.cell(row, idx))]
    capped = shaper.cap(matches)

    return FilterResult(
        operation="filter",
        parameters=shaper.parameters(column=table.headers[idx], operator=operator, value=value),
        rows=capped.items,
        total_matches=capped.total,
        returned_rows=capped.returned,
        truncated=capped.truncated,
    )


__all__ = ["build_predicate", "filter_rows"]
