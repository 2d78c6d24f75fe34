"""Query commands for the tabq CLI: load a table, run an operation, print JSON."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

import typer

from tabq_engine.engine import QueryEngine
from tabq_engine.infrastructure.io.workbook import load_table, load_tables
from tabq_engine.infrastructure.observability.context import create_logger_context
from tabq_engine.infrastructure.settings import Settings
from tabq_engine.models.errors import TabqEngineError

from .common import (
    DEBUG_OPTION,
    INPUT_OPTION,
    LOG_FORMAT_OPTION,
    LOG_LEVEL_OPTION,
    QUIET_OPTION,
    SHEET_OPTION,
    LogFormat,
    emit_json,
    parse_params,
    resolve_input,
    resolve_logging,
)

ERROR_EXIT_CODE = 2


@contextmanager
def engine_session(
    *,
    log_format: Optional[LogFormat],
    log_level: Optional[str],
    debug: bool,
    quiet: bool,
) -> Iterator[QueryEngine]:
    """Yield a configured engine; engine errors become a JSON error body and exit code 2."""

    settings = Settings.load()
    effective_format, effective_level = resolve_logging(
        log_format=log_format,
        log_level=log_level,
        debug=debug,
        quiet=quiet,
        settings=settings,
    )
    engine_settings = settings.model_copy(update={"log_format": effective_format, "log_level": effective_level})

    with create_logger_context(log_format=effective_format, log_level=effective_level) as log_ctx:
        log_ctx.logger.event(
            "settings.effective",
            level=logging.DEBUG,
            data=engine_settings.model_dump(mode="json", exclude={"synonyms"}),
        )
        try:
            yield QueryEngine(engine_settings, logger=log_ctx.logger)
        except TabqEngineError as exc:
            emit_json({"error": exc.to_dict()})
            raise typer.Exit(code=ERROR_EXIT_CODE) from exc


def describe_command(
    input_file: Path = INPUT_OPTION,
    sheet: Optional[str] = SHEET_OPTION,
    log_format: Optional[LogFormat] = LOG_FORMAT_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Show headers, canonical column names and row count of a sheet."""

    with engine_session(log_format=log_format, log_level=log_level, debug=debug, quiet=quiet) as engine:
        table = load_table(resolve_input(input_file), sheet, logger=engine.logger)
        emit_json(engine.describe(table).to_payload())


def run_command(
    operation: str = typer.Argument(..., help="Operation name, e.g. `filter`, `aggregate` or `pivot_table`."),
    input_file: Path = INPUT_OPTION,
    sheet: Optional[str] = SHEET_OPTION,
    param: List[str] = typer.Option(
        [],
        "--param",
        "-p",
        help="Operation parameter as key=value (repeatable). Values are parsed as JSON when possible.",
    ),
    params_json: Optional[str] = typer.Option(
        None,
        "--params-json",
        help="Operation parameters as a JSON object; --param entries override its keys.",
    ),
    log_format: Optional[LogFormat] = LOG_FORMAT_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Run one operation against a sheet and print the result as JSON."""

    params = parse_params(param, params_json)
    with engine_session(log_format=log_format, log_level=log_level, debug=debug, quiet=quiet) as engine:
        table = load_table(resolve_input(input_file), sheet, logger=engine.logger)
        emit_json(engine.execute(table, operation, params).to_payload())


def merge_command(
    input_files: List[Path] = typer.Option(
        ...,
        "--input",
        "-i",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Input file(s); every non-empty sheet of every file is merged.",
    ),
    merge_type: str = typer.Option("union", "--merge-type", help="`union` or `intersection` of headers."),
    log_format: Optional[LogFormat] = LOG_FORMAT_OPTION,
    log_level: Optional[str] = LOG_LEVEL_OPTION,
    debug: bool = DEBUG_OPTION,
    quiet: bool = QUIET_OPTION,
) -> None:
    """Merge sheets from one or more files into a single table."""

    with engine_session(log_format=log_format, log_level=log_level, debug=debug, quiet=quiet) as engine:
        tables = []
        for path in input_files:
            tables.extend(load_tables(resolve_input(path), logger=engine.logger))
        emit_json(engine.merge(tables, merge_type).to_payload())


def tools_command() -> None:
    """Print the operation catalogue as JSON tool definitions."""

    emit_json(QueryEngine(Settings.load()).tool_definitions())


__all__ = ["ERROR_EXIT_CODE", "describe_command", "engine_session", "merge_command", "run_command", "tools_command"]
