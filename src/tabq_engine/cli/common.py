"""Options and helpers shared by the tabq commands."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

import typer
from typer import BadParameter

from tabq_engine.infrastructure.settings import Settings


class LogFormat(str, Enum):
    """Supported log output formats."""

    text = "text"
    ndjson = "ndjson"


INPUT_OPTION = typer.Option(
    ...,
    "--input",
    "-i",
    exists=True,
    file_okay=True,
    dir_okay=False,
    resolve_path=True,
    help="CSV, XLSX or XLSM file to query.",
)
SHEET_OPTION = typer.Option(
    None,
    "--sheet",
    "-s",
    help="Worksheet to load; defaults to the first non-empty sheet.",
)
LOG_FORMAT_OPTION = typer.Option(None, "--log-format", help="Log output format (default from settings).")
LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Log level name, e.g. INFO or DEBUG.")
DEBUG_OPTION = typer.Option(False, "--debug", help="Shortcut for --log-level DEBUG.")
QUIET_OPTION = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors.")


def resolve_logging(
    *,
    log_format: Optional[LogFormat],
    log_level: Optional[str],
    debug: bool,
    quiet: bool,
    settings: Settings,
) -> tuple[str, int]:
    """Effective (format, level): --quiet beats --debug beats --log-level beats settings."""
    fmt = log_format.value if log_format is not None else settings.log_format
    if quiet:
        return fmt, logging.WARNING
    if debug:
        return fmt, logging.DEBUG
    if not log_level:
        return fmt, settings.log_level

    level = logging.getLevelNamesMapping().get(log_level.strip().upper())
    if level is None:
        raise BadParameter(f"Invalid log level: {log_level}", param_hint="log_level")
    return fmt, level


def _parse_value(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def parse_params(pairs: List[str], params_json: Optional[str]) -> dict[str, Any]:
    """Merge ``--params-json`` with repeated ``--param key=value`` options (the latter win).

    Values are read as JSON when possible (``limit=5`` -> 5), else kept as text.
    """
    params: dict[str, Any] = {}
    if params_json:
        try:
            loaded = json.loads(params_json)
        except json.JSONDecodeError as exc:
            raise BadParameter(f"--params-json is not valid JSON: {exc}", param_hint="params_json") from exc
        if not isinstance(loaded, dict):
            raise BadParameter("--params-json must be a JSON object", param_hint="params_json")
        params.update(loaded)

    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise BadParameter(f"Expected key=value, got {pair!r}", param_hint="param")
        params[key.strip()] = _parse_value(value)
    return params


def emit_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str))


def resolve_input(path: Path) -> Path:
    resolved = path.expanduser().resolve()
    if not resolved.is_file():
        raise BadParameter(f"Input file not found: {resolved}", param_hint="input")
    return resolved


__all__ = [
    "DEBUG_OPTION",
    "INPUT_OPTION",
    "LOG_FORMAT_OPTION",
    "LOG_LEVEL_OPTION",
    "LogFormat",
    "QUIET_OPTION",
    "SHEET_OPTION",
    "emit_json",
    "parse_params",
    "resolve_input",
    "resolve_logging",
]
