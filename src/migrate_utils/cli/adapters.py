"""
CLI: ``migrate-utils adapters``: registered database adapters and drivers.
"""

from __future__ import annotations

import importlib.util

import typer

from migrate_utils.cli.utils import console, print_json


def driver_installed(module: str) -> bool:
    try:
        return importlib.util.find_spec(module) is not None
    except ModuleNotFoundError:
        return False


def adapters(
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List adapter names, the driver each needs, and whether it is installed."""
    from migrate_utils.core.adapters import adapter_registry

    rows = []
    for name in adapter_registry.list_adapters():
        cls = adapter_registry.adapter_class(name)
        rows.append({
            "name": name,
            "adapter": cls.__name__,
            "driver": cls.driver_module,
            "installed": driver_installed(cls.driver_module),
        })

    if json_out:
        print_json(rows)
        return

    from rich.table import Table

    table = Table(title="Database Adapters")
    for col in ("name", "adapter", "driver", "installed"):
        table.add_column(col)
    for row in rows:
        mark = "[green]yes[/green]" if row["installed"] else "[red]no[/red]"
        table.add_row(row["name"], row["adapter"], row["driver"], mark)
    console.print(table)
