"""
CLI: ``migrate-utils script``: render copy-paste SQL scripts.
"""

from __future__ import annotations

from pathlib import Path

import typer

from migrate_utils.cli.utils import fail, write_text
from migrate_utils.core.errors import MigrateUtilsError
from migrate_utils.introspection.scripts import ScriptKind


def script(
    kind: ScriptKind = typer.Argument(..., help="mysql, postgres, postgres-gui or sqlite"),
    schema: str | None = typer.Option(None, "--schema", "-s", help="Schema / database name to embed"),
    column: list[str] | None = typer.Option(
        None, "--column", "-c", help="Column to sample (repeatable, default: MIGRATE_UTILS_DISTINCT_COLUMNS)"
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-l", min=0, help="Max distinct values per column (0 = no limit)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the script to a file"),
) -> None:
    """Print a SQL script to paste into mysql, psql or a SQL GUI.

    No database connection is made.
    """
    from migrate_utils.core.config import get_settings
    from migrate_utils.introspection.scripts import render_script
    from migrate_utils.ops.schema import error_code

    settings = get_settings()
    try:
        text = render_script(
            kind,
            schema=schema or settings.schema_name,
            distinct_columns=column or settings.distinct_columns,
            limit=settings.distinct_limit if limit is None else limit,
        )
    except MigrateUtilsError as e:
        raise fail(e, error_code(e)) from e
    write_text(text, output)
