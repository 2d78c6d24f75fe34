"""Result size bounding and provenance assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_ROW_CAP = 100


@dataclass(frozen=True, slots=True)
class CappedRows(Generic[T]):
    items: list[T]
    total: int

    @property
    def returned(self) -> int:
        return len(self.items)

    @property
    def truncated(self) -> bool:
        return self.returned < self.total


class ResultShaper:
    """Truncates row payloads and labels results with the parameters actually used."""

    def __init__(self, row_cap: int = DEFAULT_ROW_CAP) -> None:
        if row_cap < 0:
            raise ValueError("row_cap must be >= 0")
        self.row_cap = row_cap

    def cap(self, items: Sequence[T], limit: int | None = None) -> CappedRows[T]:
        bound = self.row_cap if limit is None else max(0, limit)
        return CappedRows(items=list(items[:bound]), total=len(items))

    @staticmethod
    def parameters(**resolved: Any) -> dict[str, Any]:
        return {key: value for key, value in resolved.items() if value is not None}


__all__ = ["CappedRows", "DEFAULT_ROW_CAP", "ResultShaper"]
