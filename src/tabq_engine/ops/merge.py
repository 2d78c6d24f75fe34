from __future__ import annotations

from typing import Sequence

from tabq_engine.models.errors import EmptyInputError
from tabq_engine.models.results import MergeResult
from tabq_engine.models.table import Table
from tabq_engine.ops.shaping import ResultShaper


def _merged_headers(tables: Sequence[Table], merge_type: str) -> list[str]:
    if merge_type == "intersection":
        common = set(tables[0].headers)
        for table in tables[1:]:
            common &= set(table.headers)
        return [h for h in dict.fromkeys(tables[0].headers) if h in common]

    # union, first-seen order
    return list(dict.fromkeys(h for table in tables for h in table.headers))


def merge_tables(tables: Sequence[Table], merge_type: str = "union", *, shaper: ResultShaper) -> MergeResult:
    """Stack several tables under a shared header row.

    Rows are realigned by header name; a header a table lacks reads as ``None``.
    For duplicated header names the first occurrence in each table is used.
    """

    if not tables:
        raise EmptyInputError("No tables to merge", operation="merge", parameter="tables")

    headers = _merged_headers(tables, merge_type)
    rows: list[list] = []
    for table in tables:
        positions = {}
        for idx, header in enumerate(table.headers):
            positions.setdefault(header, idx)
        for row in table.rows:
            rows.append([table.cell(row, positions[h]) if h in positions else None for h in headers])

    sources = [table.name or f"table_{i + 1}" for i, table in enumerate(tables)]
    return MergeResult(
        operation="merge",
        parameters=shaper.parameters(merge_type=merge_type),
        headers=headers,
        rows=rows,
        source_tables=sources,
        total_rows=len(rows),
    )


__all__ = ["merge_tables"]
