from __future__ import annotations

from tabq_engine.models.table import Table
from tabq_engine.ops.preview import preview
from tabq_engine.ops.shaping import ResultShaper


def _numbers(count: int) -> Table:
    return Table.of(["N"], [[i] for i in range(count)])


def test_default_limit_is_ten(shaper: ResultShaper) -> None:
    result = preview(_numbers(25), shaper=shaper)

    assert result.returned_rows == 10
    assert result.total_rows == 25
    assert result.truncated
    assert result.rows[0] == [0]
    assert result.parameters == {"limit": 10}


def test_limit_larger_than_table(shaper: ResultShaper) -> None:
    result = preview(_numbers(3), 50, shaper=shaper)

    assert result.rows == [[0], [1], [2]]
    assert not result.truncated


def test_preview_is_not_bound_by_row_cap(shaper: ResultShaper) -> None:
    result = preview(_numbers(300), 150, shaper=shaper)

    assert result.returned_rows == 150


def test_non_positive_limits_clamp_to_zero(shaper: ResultShaper) -> None:
    for limit in (0, -5):
        result = preview(_numbers(5), limit, shaper=shaper)
        assert result.rows == []
        assert result.total_rows == 5
        assert result.parameters == {"limit": 0}


def test_rows_are_returned_unchanged(sales_table: Table, shaper: ResultShaper) -> None:
    result = preview(sales_table, 2, shaper=shaper)

    assert result.headers == sales_table.headers
    assert result.rows == sales_table.rows[:2]
