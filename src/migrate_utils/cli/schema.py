"""
CLI: ``migrate-utils overview | distincts | dump``: live schema introspection.
"""

from __future__ import annotations

from pathlib import Path

import typer

from migrate_utils.cli.utils import (
    OutputFormat,
    check_result,
    connect_context,
    console,
    print_json,
    print_table,
    write_text,
)
from migrate_utils.introspection.models import DistinctSample, SchemaOverview

URL_OPTION = typer.Option(None, "--url", "-u", help="Database URL (default: MIGRATE_UTILS_DATABASE_URL)")
SCHEMA_OPTION = typer.Option(None, "--schema", "-s", help="Schema / database to inspect")
LIMIT_OPTION = typer.Option(
    None, "--limit", "-l", min=0, help="Max distinct values per column (0 = no limit)"
)


def _limit(limit: int | None) -> int:
    from migrate_utils.core.config import get_settings

    return get_settings().distinct_limit if limit is None else limit


def _columns(columns: list[str] | None) -> list[str]:
    from migrate_utils.core.config import get_settings

    return list(columns) if columns else list(get_settings().distinct_columns)


def _render(
    fmt: OutputFormat,
    overview: SchemaOverview | None,
    samples: list[DistinctSample] | None,
    output: Path | None = None,
) -> None:
    from migrate_utils.introspection import report

    if fmt == OutputFormat.JSON:
        payload = report.to_json_dict(overview, samples)
        if output is not None:
            import json

            write_text(json.dumps(payload, indent=2, default=str) + "\n", output)
        else:
            print_json(payload)
    elif fmt == OutputFormat.MARKDOWN:
        write_text(report.to_markdown(overview, samples), output)
    elif fmt == OutputFormat.TEXT or output is not None:
        write_text(report.to_text(overview, samples), output)
    else:
        if overview is not None:
            _print_overview_tables(overview)
        if samples is not None:
            _print_sample_tables(samples)


def _print_overview_tables(overview: SchemaOverview) -> None:
    console.print(f"[bold]Schema:[/bold] {overview.schema_name} ({overview.dialect})")
    print_table(overview.tables, title="Tables", columns=["table_name"])
    print_table(
        overview.columns,
        title="Columns",
        columns=["table_name", "column_name", "data_type", "is_nullable", "column_default"],
    )
    print_table(
        overview.primary_keys,
        title="Primary Keys",
        columns=["table_name", "constraint_name", "column_name"],
    )
    print_table(
        overview.foreign_keys,
        title="Foreign Keys",
        columns=["table_name", "column_name", "foreign_table_name", "foreign_column_name"],
    )
    if overview.enums:
        print_table(overview.enums, title="Enum Types", columns=["enum_name", "enum_value"])


def _print_sample_tables(samples: list[DistinctSample]) -> None:
    from migrate_utils.introspection.report import NO_DISTINCTS

    if not samples:
        console.print(f"[dim]{NO_DISTINCTS}[/dim]")
        return
    for sample in samples:
        rows = [{"value": v.value, "freq": v.freq} for v in sample.values]
        print_table(rows, title=f"Distincts: {sample.column_ref.qualified}", columns=["value", "freq"])


def overview(
    url: str | None = URL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """Show tables, columns, primary keys, foreign keys and enums."""
    from migrate_utils.ops.schema import get_schema_overview

    with connect_context(url, schema) as ctx:
        result = get_schema_overview(ctx)
    check_result(result)
    _render(format, result.data, None)


def distincts(
    columns: list[str] | None = typer.Argument(
        None, help="Columns as table.column or schema.table.column (default: MIGRATE_UTILS_DISTINCT_COLUMNS)"
    ),
    url: str | None = URL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    limit: int | None = LIMIT_OPTION,
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """Show distinct values and their frequency for selected columns."""
    from migrate_utils.ops.schema import sample_distinct_values

    with connect_context(url, schema) as ctx:
        result = sample_distinct_values(ctx, _columns(columns), _limit(limit))
    check_result(result)
    _render(format, None, result.data)


def dump(
    column: list[str] | None = typer.Option(
        None, "--column", "-c", help="Column to sample (repeatable, default: MIGRATE_UTILS_DISTINCT_COLUMNS)"
    ),
    url: str | None = URL_OPTION,
    schema: str | None = SCHEMA_OPTION,
    limit: int | None = LIMIT_OPTION,
    format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", "-f", help="Output format"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to a file"),
) -> None:
    """Schema overview plus distinct values, as one report."""
    from migrate_utils.ops.schema import dump_schema

    with connect_context(url, schema) as ctx:
        result = dump_schema(ctx, _columns(column), _limit(limit))
    check_result(result)
    _render(format, result.data.overview, result.data.samples, output)
