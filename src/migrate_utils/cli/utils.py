"""
CLI utility helpers: output formatting and connection management.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from migrate_utils.core.errors import MigrateUtilsError
from migrate_utils.ops.context import OperationContext
from migrate_utils.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Report formats accepted by ``--format``."""

    TABLE = "table"
    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"


# ── Connection helper ────────────────────────────────────────────────────


def fail(exc: MigrateUtilsError, code: str = "ERROR") -> typer.Exit:
    """Print a typed error to stderr and return the exit to raise."""
    err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(exc.message)}")
    return typer.Exit(code=1)


@contextmanager
def connect_context(url: str | None = None, schema: str | None = None) -> Iterator[OperationContext]:
    """Connected ``OperationContext`` for a CLI command.

    Falls back to ``MIGRATE_UTILS_DATABASE_URL`` / ``MIGRATE_UTILS_SCHEMA_NAME``
    when *url* / *schema* are not given.  The adapter is disconnected on exit.
    """
    from migrate_utils.core.adapters import adapter_from_url
    from migrate_utils.core.config import get_settings
    from migrate_utils.ops.schema import error_code

    settings = get_settings()
    try:
        target = url or settings.database_url
        overrides = {} if "connect_timeout=" in target else {"connect_timeout": settings.connect_timeout}
        adapter = adapter_from_url(target, **overrides)
        adapter.connect()
    except MigrateUtilsError as e:
        raise fail(e, error_code(e)) from e

    try:
        yield OperationContext(adapter=adapter, schema=schema or settings.schema_name, caller="cli")
    finally:
        adapter.disconnect()


# ── Output helpers ───────────────────────────────────────────────────────


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert dataclass / dict to plain dict."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if hasattr(obj, "__dataclass_fields__"):
        return asdict(obj)
    if isinstance(obj, dict):
        return obj
    return {"value": str(obj)}


def check_result(result: OperationResult) -> None:
    """Print warnings; on failure print the error and exit 1."""
    for warning in result.warnings:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {escape(msg)}")
        raise typer.Exit(code=1)


def print_json(payload: Any) -> None:
    console.print_json(json.dumps(payload, default=str))


def write_text(text: str, output: Path | None = None) -> None:
    """Write *text* to *output*, or to stdout unformatted."""
    if output is None:
        typer.echo(text, nl=False)
        return
    output.write_text(text, encoding="utf-8")
    err_console.print(f"[green]✓[/green] Wrote {output}")


def print_table(items: list, *, title: str = "", columns: list[str] | None = None) -> None:
    """Render a list of dataclasses/dicts as a Rich table."""
    if not items:
        console.print(f"[dim]{title + ': ' if title else ''}No items.[/dim]")
        return
    rows = [_to_dict(item) for item in items]
    columns = columns or list(rows[0])
    table = Table(title=escape(title) if title else None, show_lines=False, pad_edge=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*("" if row.get(col) is None else escape(str(row.get(col))) for col in columns))
    console.print(table)
