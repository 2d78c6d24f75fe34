from __future__ import annotations

import math
from typing import Any, Iterable

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.models.errors import ColumnNotFoundError, InvalidParameterError
from tabq_engine.models.table import Table
from tabq_engine.ops.coercion import to_number


def require_column(
    resolver: ColumnResolver,
    table: Table,
    term: str,
    *,
    operation: str,
    parameter: str = "column",
) -> int:
    idx = resolver.find_column(term, table.headers)
    if idx is None:
        raise ColumnNotFoundError(term, operation=operation, parameter=parameter)
    return idx


def numeric_values(values: Iterable[Any]) -> list[float]:
    numbers: list[float] = []
    for value in values:
        n = to_number(value)
        if not math.isnan(n):
            numbers.append(n)
    return numbers


def reduce_numbers(numbers: list[float], operation: str) -> float | None:
    """Reduce numeric values; ``None`` stands in for an undefined result (avg/min/max of nothing)."""

    if operation == "sum":
        return float(sum(numbers))
    if operation == "count":
        return float(len(numbers))
    if not numbers:
        return None
    if operation == "avg":
        return sum(numbers) / len(numbers)
    if operation == "min":
        return min(numbers)
    if operation == "max":
        return max(numbers)
    raise InvalidParameterError(f"Unsupported aggregation: {operation!r}", parameter="operation")


__all__ = ["numeric_values", "reduce_numbers", "require_column"]
