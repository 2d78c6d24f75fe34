"""CLI entrypoint for :mod:`tabq_engine`.

Exposes the tabq CLI with:

- `describe` - show the headers and canonical column names of a sheet.
- `run`      - run one operation (preview, filter, aggregate, sort, pivot, validate).
- `merge`    - merge sheets from one or more files.
- `tools`    - print the operation catalogue as tool definitions.
- `version`  - print the engine version.
"""

from __future__ import annotations

import typer

from tabq_engine import __version__
from tabq_engine.cli.query import describe_command, merge_command, run_command, tools_command


app = typer.Typer(
    help=(
        "tabq - query and transform spreadsheet tables.\n\n"
        "Every command prints JSON on stdout; logs go to stderr.\n\n"
        "## Quick Start\n\n"
        "### 1. Inspect a sheet\n"
        "```bash\n"
        "tabq describe --input sales.xlsx\n"
        "```\n\n"
        "### 2. Filter rows\n"
        "```bash\n"
        "tabq run filter --input sales.xlsx \\\n"
        "    --param column=qty --param operator='>' --param value=5\n"
        "```\n\n"
        "### 3. Grouped totals\n"
        "```bash\n"
        "tabq run aggregate --input sales.xlsx \\\n"
        "    --params-json '{\"column\": \"price\", \"operation\": \"sum\", \"groupBy\": \"region\"}'\n"
        "```\n"
    ),
    no_args_is_help=True,
    rich_markup_mode="markdown",
)

app.command("describe")(describe_command)
app.command("run")(run_command)
app.command("merge")(merge_command)
app.command("tools")(tools_command)


@app.command("version")
def version_command() -> None:
    """Print the engine version."""
    typer.echo(__version__)


def main() -> None:
    """Entrypoint used by console scripts and `python -m tabq_engine`."""
    app()


__all__ = ["app", "main"]
