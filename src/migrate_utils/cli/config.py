"""
CLI: ``migrate-utils config``: configuration inspection.
"""

from __future__ import annotations

import typer

from migrate_utils.cli.utils import console, print_json

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config(
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Show the effective configuration (password masked)."""
    from migrate_utils.core.config import get_settings

    data = get_settings().safe_dump()

    if json_out:
        print_json(data)
        return

    from rich.table import Table

    table = Table(title="Settings")
    table.add_column("Setting")
    table.add_column("Env var")
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        if isinstance(value, list):
            value = ", ".join(value) or "-"
        table.add_row(key, f"MIGRATE_UTILS_{key.upper()}", "-" if value is None else str(value))
    console.print(table)
