from __future__ import annotations

import pytest

from tabq_engine.models.errors import ColumnNotFoundError, InvalidParameterError
from tabq_engine.models.results import AggregateResult, GroupedAggregateResult
from tabq_engine.models.table import Table
from tabq_engine.ops.aggregate import aggregate


@pytest.mark.parametrize(
    ("operation", "expected"),
    [("sum", 18.0), ("avg", 4.5), ("min", 1.0), ("max", 10.0), ("count", 4.0)],
)
def test_ungrouped_reductions(sales_table, resolver, shaper, operation, expected) -> None:
    result = aggregate(sales_table, "qty", operation, resolver=resolver, shaper=shaper)

    assert isinstance(result, AggregateResult)
    assert result.result == expected
    assert result.count == 4
    assert result.parameters == {"column": "Qty", "operation": operation}


def test_only_numeric_cells_take_part(resolver, shaper) -> None:
    table = Table.of(["Qty"], [["10"], ["abc"], [None]])

    result = aggregate(table, "qty", "sum", resolver=resolver, shaper=shaper)

    assert result.result == 10
    assert result.count == 1


def test_count_counts_numbers_not_rows(resolver, shaper) -> None:
    table = Table.of(["Qty"], [[1], ["x"], [""], [3]])

    result = aggregate(table, "qty", "count", resolver=resolver, shaper=shaper)

    assert result.result == 2


def test_reductions_over_nothing(resolver, shaper) -> None:
    table = Table.of(["Qty"], [["x"], [None]])

    assert aggregate(table, "qty", "sum", resolver=resolver, shaper=shaper).result == 0
    assert aggregate(table, "qty", "avg", resolver=resolver, shaper=shaper).result is None
    assert aggregate(table, "qty", "max", resolver=resolver, shaper=shaper).result is None


def test_grouped_sum_in_first_appearance_order(sales_table, resolver, shaper) -> None:
    result = aggregate(sales_table, "qty", "sum", "region", resolver=resolver, shaper=shaper)

    assert isinstance(result, GroupedAggregateResult)
    assert [(g.group, g.result, g.count) for g in result.groups] == [
        ("North", 5.0, 1),
        ("South", 11.0, 2),
        ("East", 2.0, 1),
    ]
    assert result.total_groups == 3
    assert result.parameters["group_by"] == "Region"


def test_group_sums_add_up_to_the_total(sales_table, resolver, shaper) -> None:
    total = aggregate(sales_table, "qty", "sum", resolver=resolver, shaper=shaper).result
    grouped = aggregate(sales_table, "qty", "sum", "product", resolver=resolver, shaper=shaper)

    assert sum(g.result for g in grouped.groups) == total


def test_groups_without_numbers_are_kept(resolver, shaper) -> None:
    table = Table.of(["Team", "Score"], [["a", "x"], ["b", 1], ["a", None]])

    result = aggregate(table, "score", "avg", "team", resolver=resolver, shaper=shaper)
    payload = result.to_payload()

    assert payload["groups"] == [
        {"group": "a", "result": None, "count": 0},
        {"group": "b", "result": 1.0, "count": 1},
    ]
    assert payload["kind"] == "grouped_aggregated"
    assert payload["totalGroups"] == 2


def test_missing_group_key_groups_under_empty_string(resolver, shaper) -> None:
    table = Table.of(["Team", "Score"], [["a", 1], [None, 2], ["", 3]])

    result = aggregate(table, "score", "sum", "team", resolver=resolver, shaper=shaper)

    assert [(g.group, g.result) for g in result.groups] == [("a", 1.0), ("", 5.0)]


def test_unknown_group_column_names_its_parameter(sales_table, resolver, shaper) -> None:
    with pytest.raises(ColumnNotFoundError) as excinfo:
        aggregate(sales_table, "qty", "sum", "warehouse", resolver=resolver, shaper=shaper)

    assert excinfo.value.parameter == "group_by"


def test_unknown_operation_is_rejected(sales_table, resolver, shaper) -> None:
    with pytest.raises(InvalidParameterError):
        aggregate(sales_table, "qty", "median", resolver=resolver, shaper=shaper)


def test_column_is_not_swapped_for_a_synonym(resolver, shaper) -> None:
    table = Table.of(["Region", "Unit Cost", "Price"], [["N", 1, 100], ["S", 2, 200]])

    result = aggregate(table, "Price", "sum", resolver=resolver, shaper=shaper)

    assert result.parameters == {"column": "Price", "operation": "sum"}
    assert result.result == 300.0
