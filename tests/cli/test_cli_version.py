from __future__ import annotations

import tomllib
from pathlib import Path

from typer.testing import CliRunner

from tabq_engine.cli.app import app

ROOT = Path(__file__).resolve().parents[2]

runner = CliRunner()


def test_no_args_shows_help() -> None:
    result = runner.invoke(app, [])
    assert "Usage:" in result.output
    assert "Commands" in result.output


def test_version_command_outputs_pyproject_version() -> None:
    expected_version = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))["project"]["version"]

    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == expected_version
