from __future__ import annotations

import pytest

from tabq_engine.models.errors import EmptyInputError
from tabq_engine.models.table import Table
from tabq_engine.ops.merge import merge_tables


def _tables() -> list[Table]:
    return [
        Table.of(["A", "B"], [[1, 2]], name="first"),
        Table.of(["B", "C"], [[3, 4], [5]]),
    ]


def test_union_realigns_rows_by_header(shaper) -> None:
    result = merge_tables(_tables(), shaper=shaper)

    assert result.headers == ["A", "B", "C"]
    assert result.rows == [[1, 2, None], [None, 3, 4], [None, 5, None]]
    assert result.source_tables == ["first", "table_2"]
    assert result.total_rows == 3


def test_intersection_keeps_shared_headers(shaper) -> None:
    result = merge_tables(_tables(), "intersection", shaper=shaper)

    assert result.headers == ["B"]
    assert result.rows == [[2], [3], [5]]
    assert result.parameters == {"merge_type": "intersection"}


def test_duplicate_headers_read_first_occurrence(shaper) -> None:
    result = merge_tables([Table.of(["A", "A"], [[1, 2]])], shaper=shaper)

    assert result.headers == ["A"]
    assert result.rows == [[1]]


def test_merge_requires_tables(shaper) -> None:
    with pytest.raises(EmptyInputError):
        merge_tables([], shaper=shaper)
