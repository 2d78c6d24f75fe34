from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tabq_engine.infrastructure.observability import NullLogger, create_logger_context
from tabq_engine.infrastructure.observability.logger import EngineLogger, qualify_event_name


@pytest.mark.parametrize(
    ("name", "namespace", "expected"),
    [
        ("operation.completed", "engine", "engine.operation.completed"),
        ("engine.table.loaded", "engine", "engine.table.loaded"),
        ("table.loaded", "engine.cli", "engine.cli.table.loaded"),
        ("", "engine", "engine.invalid_event"),
        (".log.", "", "log"),
    ],
)
def test_qualify_event_name(name: str, namespace: str, expected: str) -> None:
    assert qualify_event_name(name, namespace) == expected


def _debug_logger(name: str) -> EngineLogger:
    base = logging.getLogger(name)
    base.setLevel(logging.DEBUG)
    return EngineLogger(base)


def test_unregistered_engine_event_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown engine event"):
        _debug_logger("tabq_engine.tests.unregistered").event("made.up")


def test_payload_is_validated_against_its_schema() -> None:
    logger = _debug_logger("tabq_engine.tests.payload")

    with pytest.raises(ValueError, match="Invalid payload"):
        logger.event("table.loaded", data={"source": "x.csv", "row_count": "3", "column_count": 2})


def _read_ndjson(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_ndjson_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "engine.ndjson"

    with create_logger_context(log_format="json", log_level=logging.DEBUG, console=False, log_file=log_file) as ctx:
        ctx.logger.event(
            "table.loaded",
            data={"source": "sales.csv", "sheet_name": "sales", "row_count": 3, "column_count": 2},
        )
        ctx.logger.info("plain line")
        session_id = ctx.logger.session_id

    first, second = _read_ndjson(log_file)
    assert first["event"] == "engine.table.loaded"
    assert first["level"] == "info"
    assert first["session_id"] == session_id
    assert first["data"] == {
        "schema_version": 1,
        "source": "sales.csv",
        "sheet_name": "sales",
        "row_count": 3,
        "column_count": 2,
    }
    assert first["timestamp"].endswith("Z")
    assert second["event"] == "engine.log"
    assert second["message"] == "plain line"


def test_text_log_file_respects_level(tmp_path: Path) -> None:
    log_file = tmp_path / "engine.log"

    with create_logger_context(log_format="text", log_level=logging.WARNING, console=False, log_file=log_file) as ctx:
        ctx.logger.event("validate.column_unresolved", level=logging.WARNING, data={"column": "warehouse"})
        ctx.logger.event("operation.failed", level=logging.DEBUG, data={"operation": "sort", "error_kind": "x"})

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert "WARNING engine.validate.column_unresolved" in lines[0]
    assert "column=warehouse" in lines[0]


def test_exceptions_are_rendered(tmp_path: Path) -> None:
    log_file = tmp_path / "engine.ndjson"

    with create_logger_context(log_format="ndjson", console=False, log_file=log_file) as ctx:
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            ctx.logger.event("log", level=logging.ERROR, message="failed", exc=exc)

    (record,) = _read_ndjson(log_file)
    assert record["error"]["type"] == "RuntimeError"
    assert "boom" in record["error"]["stack_trace"]


def test_invalid_log_format() -> None:
    with pytest.raises(ValueError):
        create_logger_context(log_format="xml")


def test_null_logger_is_silent(caplog: pytest.LogCaptureFixture) -> None:
    logger = NullLogger()

    with caplog.at_level(logging.DEBUG):
        logger.event("made.up.but.ignored")
        logger.warning("nothing")

    assert not logger
    assert caplog.records == []
