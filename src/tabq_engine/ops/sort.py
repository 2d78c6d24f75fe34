from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Any

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.models.errors import InvalidParameterError
from tabq_engine.models.results import SortResult
from tabq_engine.models.table import Table
from tabq_engine.ops.base import require_column
from tabq_engine.ops.coercion import stringify, to_number
from tabq_engine.ops.shaping import ResultShaper


def compare_cells(a: Any, b: Any) -> int:
    """Numeric ordering when both cells are numeric, else case-insensitive text ordering."""

    x, y = to_number(a), to_number(b)
    if not math.isnan(x) and not math.isnan(y):
        return (x > y) - (x < y)

    left, right = stringify(a).casefold(), stringify(b).casefold()
    return (left > right) - (left < right)


def sort_rows(
    table: Table,
    column: str,
    order: str = "asc",
    *,
    resolver: ColumnResolver,
    shaper: ResultShaper,
) -> SortResult:
    if order not in ("asc", "desc"):
        raise InvalidParameterError(f"Unsupported sort order: {order!r}", operation="sort", parameter="order")

    idx = require_column(resolver, table, column, operation="sort")
    sign = -1 if order == "desc" else 1

    # sorted() is stable: equal keys keep input order in both directions.
    key = cmp_to_key(lambda r1, r2: sign * compare_cells(table.cell(r1, idx), table.cell(r2, idx)))
    ordered = sorted((list(row) for row in table.rows), key=key)
    capped = shaper.cap(ordered)

    return SortResult(
        operation="sort",
        parameters=shaper.parameters(column=table.headers[idx], order=order),
        rows=capped.items,
        total_rows=capped.total,
        returned_rows=capped.returned,
        truncated=capped.truncated,
    )


__all__ = ["compare_cells", "sort_rows"]
