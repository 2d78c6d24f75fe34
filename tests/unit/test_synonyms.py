from __future__ import annotations

import pytest

from tabq_engine.columns import ColumnResolver, SynonymTable
from tabq_engine.columns.synonyms import DEFAULT_SYNONYMS
from tabq_engine.models.errors import ConfigError


def test_default_table_preserves_entry_order() -> None:
    table = SynonymTable.default()

    assert len(table) == 8
    assert table.canonical_fields() == list(DEFAULT_SYNONYMS)
    assert table.as_dict()["quantity"] == ["qty", "amount", "count", "number"]


def test_first_canonical_field_wins_on_shared_alias() -> None:
    # "amount" is an alias of both quantity and price; quantity comes first.
    assert SynonymTable.default().match("sales amount") == "quantity"


def test_match_returns_none_without_alias() -> None:
    assert SynonymTable.default().match("unit price") is None


def test_from_mapping_normalizes_case() -> None:
    table = SynonymTable.from_mapping({" SKU ": ["Article", "Part No"]})

    assert table.as_dict() == {"sku": ["article", "part no"]}


@pytest.mark.parametrize(
    "mapping",
    [
        {"": ["x"]},
        {"sku": "article"},
        {"sku": ["article", "  "]},
    ],
)
def test_from_mapping_rejects_malformed_tables(mapping) -> None:
    with pytest.raises(ConfigError):
        SynonymTable.from_mapping(mapping)


def test_custom_table_drives_normalization() -> None:
    resolver = ColumnResolver(SynonymTable.from_mapping({"sku": ["article"]}))

    assert resolver.normalize("Article No") == "sku"
    assert resolver.normalize("Qty") == "qty"
