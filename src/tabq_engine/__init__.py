"""Tabular query engine: column resolution and table operations for spreadsheet data.

Heavy submodules load on first attribute access, so ``import tabq_engine`` stays cheap
for the CLI's ``version`` command.
"""

from __future__ import annotations

import tomllib
from importlib import import_module, metadata
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tabq_engine.columns import ColumnResolver, SynonymTable
    from tabq_engine.engine import QueryEngine
    from tabq_engine.infrastructure.settings import Settings
    from tabq_engine.models import ErrorKind, Table, TabqEngineError


def _read_version() -> str:
    # A source checkout reports the version in its pyproject; installs use package metadata.
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        try:
            version = tomllib.loads(pyproject.read_text(encoding="utf-8"))["project"]["version"]
        except (OSError, KeyError, tomllib.TOMLDecodeError):
            version = None
        if isinstance(version, str) and version:
            return version
    try:
        return metadata.version("tabq-engine")
    except metadata.PackageNotFoundError:  # pragma: no cover
        return "0.0.0+unknown"


__version__ = _read_version()

_LAZY: dict[str, str] = {
    "ColumnResolver": "tabq_engine.columns",
    "SynonymTable": "tabq_engine.columns",
    "QueryEngine": "tabq_engine.engine",
    "Settings": "tabq_engine.infrastructure.settings",
    "ErrorKind": "tabq_engine.models",
    "Table": "tabq_engine.models",
    "TabqEngineError": "tabq_engine.models",
}


def __getattr__(name: str) -> Any:
    module = _LAZY.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    value = getattr(import_module(module), name)
    globals()[name] = value
    return value


__all__ = [
    "ColumnResolver",
    "ErrorKind",
    "QueryEngine",
    "Settings",
    "SynonymTable",
    "Table",
    "TabqEngineError",
    "__version__",
]
