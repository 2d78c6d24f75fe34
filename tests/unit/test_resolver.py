from __future__ import annotations

import logging

import pytest

from tabq_engine.columns import ColumnResolver
from tabq_engine.columns.resolver import CONTAINMENT_CONFIDENCE, clean
from tabq_engine.infrastructure.observability.logger import EngineLogger
from tabq_engine.models.errors import EmptyInputError


def test_clean_strips_punctuation_and_whitespace() -> None:
    assert clean("  Customer-ID!  ") == "customer id"
    assert clean("Unit\t\tPrice") == "unit price"
    assert clean(None) == ""


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Unit Price", "unit_price"),
        ("Qty", "quantity"),
        ("Sales Amount", "quantity"),
        ("Total Sales", "revenue"),
        ("Client Name", "customer"),
        ("Order Timestamp", "date"),
        ("Customer-ID", "customer_id"),
        ("", ""),
        ("!!!", ""),
    ],
)
def test_normalize(resolver: ColumnResolver, name: str, expected: str) -> None:
    assert resolver.normalize(name) == expected


def test_map_headers_is_positional(resolver: ColumnResolver) -> None:
    assert resolver.map_headers(["Qty", "Unit Price", None]) == ["quantity", "unit_price", ""]


def test_resolve_by_containment(resolver: ColumnResolver) -> None:
    match = resolver.resolve_match("qty", ["Quantity Ordered", "Unit Price"])

    assert match.header == "Quantity Ordered"
    assert match.index == 0
    assert match.strategy == "containment"
    assert match.confidence == CONTAINMENT_CONFIDENCE


def test_resolve_returns_each_header_for_itself(resolver: ColumnResolver) -> None:
    headers = ["Region", "Product", "Qty", "Unit Price"]

    for header in headers:
        match = resolver.resolve_match(header, headers)
        assert match.header == header
        assert match.strategy == "exact"
        assert match.confidence == 1.0


def test_resolve_prefers_the_header_spelled_like_the_query(resolver: ColumnResolver) -> None:
    headers = ["Amount", "Qty"]
    assert resolver.normalize("Amount") == resolver.normalize("Qty")

    assert resolver.resolve("Qty", headers) == "Qty"
    assert resolver.resolve(" amount ", headers) == "Amount"
    match = resolver.resolve_match("qty", headers)
    assert (match.index, match.strategy, match.confidence) == (1, "exact", 1.0)


def test_resolve_exact_by_canonical_field(resolver: ColumnResolver) -> None:
    match = resolver.resolve_match("quantity", ["Region", "Qty"])

    assert match.header == "Qty"
    assert match.strategy == "exact"


def test_resolve_falls_back_to_edit_distance(resolver: ColumnResolver) -> None:
    match = resolver.resolve_match("prodct", ["Region", "Product"])

    assert match.header == "Product"
    assert match.strategy == "fuzzy"
    assert match.distance == 1
    assert match.confidence == pytest.approx(1 - 1 / 7, abs=1e-4)


def test_fuzzy_ties_pick_the_first_header(resolver: ColumnResolver) -> None:
    assert resolver.resolve("zz", ["ab", "cd"]) == "ab"


def test_resolve_never_misses_on_non_empty_headers(resolver: ColumnResolver) -> None:
    assert resolver.resolve("completely unrelated", ["Region"]) == "Region"


def test_resolve_rejects_empty_headers(resolver: ColumnResolver) -> None:
    with pytest.raises(EmptyInputError):
        resolver.resolve("qty", [])


def test_find_column_uses_containment(resolver: ColumnResolver) -> None:
    headers = ["Region", "Product", "Qty"]

    assert resolver.find_column("QTY", headers) == 2
    assert resolver.find_column("prod", headers) == 1
    assert resolver.find_column("price", headers) is None
    assert resolver.find_column("", headers) is None


def test_find_column_ignores_synonyms(resolver: ColumnResolver) -> None:
    assert resolver.find_column("quantity", ["Region", "Product", "Qty"]) is None
    assert resolver.find_column("Price", ["Region", "Unit Cost", "Price"]) == 2
    assert resolver.find_column("sales", ["Sales Amount"]) == 0


def test_find_column_skips_blank_headers(resolver: ColumnResolver) -> None:
    assert resolver.find_column("region", ["", "Region"]) == 1


def test_resolution_is_logged_as_an_event(caplog: pytest.LogCaptureFixture) -> None:
    base = logging.getLogger("tabq_engine.tests.resolver")
    resolver = ColumnResolver(logger=EngineLogger(base, session_id="s-1"))

    with caplog.at_level(logging.DEBUG, logger=base.name):
        resolver.resolve("qty", ["Quantity Ordered"])

    events = [r for r in caplog.records if getattr(r, "event", None) == "engine.column.resolved"]
    assert len(events) == 1
    assert events[0].data["strategy"] == "containment"
    assert events[0].data["header"] == "Quantity Ordered"
    assert events[0].session_id == "s-1"
