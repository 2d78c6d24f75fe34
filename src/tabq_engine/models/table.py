from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True, slots=True)
class Table:
    """Row-oriented table as handed over by the caller.

    Rows may be ragged: a cell past the end of a row reads as ``None``.
    Headers are not required to be unique.
    """

    headers: list[str]
    rows: list[list[Any]] = field(default_factory=list)
    name: str | None = None

    @classmethod
    def of(cls, headers: Sequence[Any], rows: Sequence[Sequence[Any]], *, name: str | None = None) -> "Table":
        return cls(
            headers=["" if h is None else str(h) for h in headers],
            rows=[list(r) for r in rows],
            name=name,
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.headers)

    def cell(self, row: Sequence[Any], index: int) -> Any:
        return row[index] if 0 <= index < len(row) else None

    def column(self, index: int) -> list[Any]:
        return [self.cell(row, index) for row in self.rows]


__all__ = ["Table"]
