from __future__ import annotations

import logging
from typing import Any, Hashable

from tabq_engine.columns.resolver import ColumnResolver
from tabq_engine.infrastructure.observability.logger import EngineLogger
from tabq_engine.models.results import ColumnIssue, ValidationReport
from tabq_engine.models.table import Table
from tabq_engine.ops.shaping import ResultShaper


def is_blank(value: Any) -> bool:
    return value is None or value == ""


def _identity(value: Any) -> Hashable:
    # 5 and "5" are distinct values; 5 and 5.0 are the same number.
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (int, float)):
        return ("number", value)
    if value is None:
        return ("null",)
    try:
        hash(value)
    except TypeError:
        return ("repr", repr(value))
    return (type(value).__name__, value)


def _percentage(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole else 0.0


def validate(
    table: Table,
    column: str | None = None,
    *,
    resolver: ColumnResolver,
    shaper: ResultShaper,
    logger: EngineLogger | None = None,
) -> ValidationReport:
    """Report blank cells (``None``, missing, or ``""``).

    Without ``column`` every header with at least one blank cell is listed.
    With ``column`` the resolved column is always reported together with its
    unique-value count. An unresolvable ``column`` yields an empty report
    rather than an error.
    """

    total = table.row_count
    issues: list[ColumnIssue] = []

    if column:
        idx = resolver.find_column(column, table.headers)
        if idx is None:
            if logger is not None:
                logger.event("validate.column_unresolved", level=logging.WARNING, data={"column": column})
            return ValidationReport(
                operation="validate",
                parameters=shaper.parameters(column=column),
                issues=[],
                total_issues=0,
            )

        values = table.column(idx)
        null_count = sum(1 for v in values if is_blank(v))
        issues.append(
            ColumnIssue(
                column=table.headers[idx],
                null_count=null_count,
                null_percentage=_percentage(null_count, total),
                unique_count=len({_identity(v) for v in values}),
                total_count=total,
            )
        )
        return ValidationReport(
            operation="validate",
            parameters=shaper.parameters(column=table.headers[idx]),
            issues=issues,
            total_issues=len(issues),
        )

    for idx, header in enumerate(table.headers):
        null_count = sum(1 for v in table.column(idx) if is_blank(v))
        if null_count:
            issues.append(
                ColumnIssue(column=header, null_count=null_count, null_percentage=_percentage(null_count, total))
            )

    return ValidationReport(
        operation="validate",
        parameters={},
        issues=issues,
        total_issues=len(issues),
    )


__all__ = ["is_blank", "validate"]
