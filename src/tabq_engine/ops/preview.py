from __future__ import annotations

from tabq_engine.models.results import PreviewResult
from tabq_engine.models.table import Table
from tabq_engine.ops.shaping import ResultShaper

DEFAULT_PREVIEW_LIMIT = 10


def preview(
    table: Table,
    limit: int | None = None,
    *,
    shaper: ResultShaper,
    default_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> PreviewResult:
    """Return the first ``limit`` rows unchanged; non-positive limits yield no rows."""

    effective = default_limit if limit is None else max(0, limit)
    capped = shaper.cap(table.rows, limit=effective)
    return PreviewResult(
        operation="preview",
        parameters=shaper.parameters(limit=effective),
        headers=list(table.headers),
        rows=[list(row) for row in capped.items],
        total_rows=capped.total,
        returned_rows=capped.returned,
        truncated=capped.truncated,
    )


__all__ = ["DEFAULT_PREVIEW_LIMIT", "preview"]
