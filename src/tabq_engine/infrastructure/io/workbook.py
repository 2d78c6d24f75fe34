"""Workbook IO helpers: materialize CSV/XLSX sources as :class:`Table` values."""

from __future__ import annotations

import csv
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Any, Iterable, Sequence

import openpyxl
from openpyxl import Workbook
from openpyxl.utils.exceptions import InvalidFileException

from tabq_engine.infrastructure.observability.logger import EngineLogger
from tabq_engine.models.errors import InputError
from tabq_engine.models.table import Table

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xlsm")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _trim_trailing(values: Sequence[Any]) -> list[Any]:
    end = len(values)
    while end and _is_blank(values[end - 1]):
        end -= 1
    return list(values[:end])


def rows_to_table(raw_rows: Iterable[Sequence[Any]], *, name: str | None = None) -> Table | None:
    """Build a table from raw sheet rows; the first non-blank row is the header row.

    Returns ``None`` for a sheet with no content.
    """

    rows = [_trim_trailing(row) for row in raw_rows]
    while rows and not rows[-1]:
        rows.pop()

    start = next((i for i, row in enumerate(rows) if row), None)
    if start is None:
        return None

    headers = ["" if h is None else str(h).strip() for h in rows[start]]
    return Table(headers=headers, rows=rows[start + 1 :], name=name)


def load_source_workbook(path: Path) -> Workbook:
    """Load source data from CSV/XLSX into a workbook."""

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise InputError(f"Unsupported file type: {path.name}", parameter="input")
    if not path.is_file():
        raise InputError(f"Input file not found: {path}", parameter="input")

    if suffix == ".csv":
        wb = Workbook()
        ws = wb.active
        if ws is None:
            raise InputError("Failed to initialize worksheet for CSV input")
        ws.title = path.stem[:31] or "Sheet1"
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            for row in csv.reader(handle):
                ws.append(row)
        return wb

    try:
        return openpyxl.load_workbook(filename=path, read_only=True, data_only=True)
    except (InvalidFileException, OSError, KeyError, ValueError) as exc:
        raise InputError(f"Could not read workbook {path.name}: {exc}", parameter="input") from exc


@contextmanager
def open_source_workbook(path: Path):
    """Context manager for safely opening source workbooks."""

    workbook = load_source_workbook(path)
    try:
        yield workbook
    finally:
        with suppress(Exception):
            workbook.close()


def resolve_sheet_names(workbook: Workbook, requested: list[str] | None) -> list[str]:
    """Determine which sheets to load, preserving source order."""

    visible = [ws.title for ws in workbook.worksheets if getattr(ws, "sheet_state", "visible") == "visible"]
    if not requested:
        return visible

    cleaned = [name.strip() for name in requested if isinstance(name, str) and name.strip()]
    unique_requested = list(dict.fromkeys(cleaned))

    missing = [name for name in unique_requested if name not in visible]
    if missing:
        raise InputError(f"Worksheet(s) not found: {', '.join(missing)}", parameter="sheet")

    order_index = {name: idx for idx, name in enumerate(visible)}
    return sorted(unique_requested, key=lambda n: order_index[n])


def load_tables(path: Path, sheets: list[str] | None = None, *, logger: EngineLogger | None = None) -> list[Table]:
    """Load one table per non-empty worksheet (a CSV file yields a single table)."""

    path = Path(path)
    tables: list[Table] = []
    with open_source_workbook(path) as workbook:
        for sheet_name in resolve_sheet_names(workbook, sheets):
            ws = workbook[sheet_name]
            table = rows_to_table(ws.iter_rows(values_only=True), name=sheet_name)
            if table is None:
                continue
            tables.append(table)
            if logger is not None:
                logger.event(
                    "table.loaded",
                    data={
                        "source": path.name,
                        "sheet_name": sheet_name,
                        "row_count": table.row_count,
                        "column_count": table.width,
                    },
                )
    return tables


def load_table(path: Path, sheet: str | None = None, *, logger: EngineLogger | None = None) -> Table:
    """Load a single table: the named sheet, or the first non-empty one."""

    tables = load_tables(path, [sheet] if sheet else None, logger=logger)
    if not tables:
        raise InputError(f"No tabular data found in {Path(path).name}", parameter="input")
    return tables[0]


__all__ = [
    "SUPPORTED_EXTENSIONS",
    "load_source_workbook",
    "load_table",
    "load_tables",
    "open_source_workbook",
    "resolve_sheet_names",
    "rows_to_table",
]
