"""Shared fixtures for the tabq_engine test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tabq_engine.columns import ColumnResolver
from tabq_engine.engine import QueryEngine
from tabq_engine.infrastructure.observability.logger import NullLogger
from tabq_engine.infrastructure.settings import ENV_PREFIX, Settings
from tabq_engine.models.table import Table
from tabq_engine.ops.shaping import ResultShaper

SALES_HEADERS = ["Region", "Product", "Qty", "Price", "Notes"]
SALES_ROWS = [
    ["North", "Widget", 5, "2.5", ""],
    ["South", "Gadget", "10", 4, None],
    ["North", "Gizmo", "n/a", 3, "late"],
    ["East", "Widget", 2, "1.5", "ok"],
    ["South", "Widget", 1, 6],
]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sales_table() -> Table:
    return Table.of(SALES_HEADERS, SALES_ROWS, name="Sales")


@pytest.fixture
def resolver() -> ColumnResolver:
    return ColumnResolver()


@pytest.fixture
def shaper() -> ResultShaper:
    return ResultShaper()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings.load(cwd=tmp_path)


@pytest.fixture
def engine(settings: Settings) -> QueryEngine:
    return QueryEngine(settings, logger=NullLogger())
