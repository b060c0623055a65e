"""
Copy-paste SQL scripts.

Renders the standalone introspection scripts for people who can only paste
SQL into a client (``mysql``, ``psql``) or a GUI tool (pgAdmin, DBeaver,
DataGrip).  The overview sections come from the same catalog the live
inspector runs; distinct sections are rendered statically, one quoted
``SELECT`` per configured column, so no dynamic SQL is needed.

Script kinds::

    mysql          MySQL/MariaDB client: SET @db_name, SELECT '...' banners,
                   structure + distincts
    postgres       psql: \\set schema_name, \\echo banners, :'schema_name',
                   structure + distincts
    postgres-gui   no meta-commands, literal schema, /* === ... === */
                   banners, structure only
    sqlite         sqlite3 shell or GUI, literal 'main', structure only

Usage:
    from migrate_utils.introspection.scripts import ScriptKind, render_script

    sql = render_script(
        ScriptKind.POSTGRES,
        schema="public",
        distinct_columns=["public.orders.status"],
        limit=500,
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from migrate_utils.core.dialect import Dialect, get_dialect
from migrate_utils.introspection.catalog import get_catalog
from migrate_utils.introspection.models import ColumnRef
from migrate_utils.introspection.refs import parse_column_refs
from migrate_utils.introspection.sampler import (
    DEFAULT_DISTINCT_LIMIT,
    build_distinct_query,
    validate_limit,
)


class ScriptKind(str, Enum):
    """Kinds of copy-paste script."""

    MYSQL = "mysql"
    POSTGRES = "postgres"
    POSTGRES_GUI = "postgres-gui"
    SQLITE = "sqlite"

    @property
    def dialect_name(self) -> str:
        return {
            ScriptKind.MYSQL: "mysql",
            ScriptKind.POSTGRES: "postgresql",
            ScriptKind.POSTGRES_GUI: "postgresql",
            ScriptKind.SQLITE: "sqlite",
        }[self]

    @property
    def samples_distincts(self) -> bool:
        return self in (ScriptKind.MYSQL, ScriptKind.POSTGRES)


OVERVIEW_BANNER = "=== SCHEMA OVERVIEW ==="
DISTINCT_BANNER = "=== DISTINCT VALUES FOR SELECTED COLUMNS ==="

_HEADERS: dict[ScriptKind, str] = {
    ScriptKind.MYSQL: (
        "-- MySQL/MariaDB: Extract DB structure (tables, columns, types, PK/FK) "
        "and distinct values for selected columns\n"
        "-- Run in a MySQL/MariaDB client connected to the target database."
    ),
    ScriptKind.POSTGRES: (
        "-- Postgres: Extract DB structure (tables, columns, types, PK/FK) "
        "and distinct values for selected columns\n"
        "-- Run with psql: psql -f this_file.sql"
    ),
    ScriptKind.POSTGRES_GUI: (
        "-- PostgreSQL: Copy-paste friendly schema overview "
        "(no psql meta-commands, no DISTINCT sampling)\n"
        "-- Open in your SQL editor (pgAdmin, DBeaver, DataGrip, etc.) and run the "
        "whole file or each section separately."
    ),
    ScriptKind.SQLITE: (
        "-- SQLite: Copy-paste friendly schema overview (no DISTINCT sampling)\n"
        "-- Run with the sqlite3 shell or any SQLite GUI."
    ),
}


def sql_literal(value: str) -> str:
    """Single-quoted SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def _psql_echo(text: str) -> str:
    return "\\echo " + sql_literal(text)


def _banner(kind: ScriptKind, text: str, *, first: bool = False) -> list[str]:
    match kind:
        case ScriptKind.MYSQL:
            if first or text.startswith("==="):
                return [f"SELECT {sql_literal(text)} AS header;"]
            return [f"SELECT '---' AS sep, {sql_literal(text)} AS header;"]
        case ScriptKind.POSTGRES:
            if first or text.startswith("==="):
                return [_psql_echo(text)]
            return [_psql_echo("---"), _psql_echo(text)]
        case _:
            return [f"/* === {text} === */"]


def _schema_reference(kind: ScriptKind, schema: str | None, dialect: Dialect) -> str:
    match kind:
        case ScriptKind.MYSQL:
            return "@db_name"
        case ScriptKind.POSTGRES:
            return ":'schema_name'"
        case _:
            return sql_literal(schema or dialect.default_schema or "")


def _config_block(kind: ScriptKind, schema: str | None, limit: int | None) -> list[str]:
    match kind:
        case ScriptKind.MYSQL:
            target = sql_literal(schema) if schema else "DATABASE()"
            return [
                "-- Database to inspect (DATABASE() = the one you are connected to).",
                f"SET @db_name = {target};",
                f"-- Distinct values per column: {limit or 'no limit'}",
            ]
        case ScriptKind.POSTGRES:
            return [
                _psql_echo("=== CONFIGURATION ==="),
                f"\\set schema_name {sql_literal(schema or 'public')}",
                f"-- Distinct values per column: {limit or 'no limit'}",
            ]
        case _:
            return []


def _distinct_section(
    kind: ScriptKind,
    dialect: Dialect,
    refs: list[ColumnRef],
    limit: int | None,
) -> list[str]:
    lines = _banner(kind, DISTINCT_BANNER)
    if not refs:
        lines.append("-- No columns configured for distinct sampling.")
        return lines

    for ref in refs:
        query = build_distinct_query(dialect, ref, limit)
        if kind == ScriptKind.MYSQL:
            if ref.schema:
                lines.append(f"SELECT {sql_literal(f'--- DISTINCTS: {ref.qualified} ---')} AS section;")
            else:
                tail = sql_literal(f".{ref.qualified} ---")
                lines.append(f"SELECT CONCAT('--- DISTINCTS: ', @db_name, {tail}) AS section;")
            select = query.replace("SELECT ", f"SELECT {sql_literal(str(ref))} AS column_ref, ", 1)
            lines.append(f"{select};")
        else:
            lines.append(_psql_echo(f"--- DISTINCTS: {ref.qualified} ---"))
            lines.append(f"{query};")
    return lines


def render_script(
    kind: ScriptKind | str,
    *,
    schema: str | None = None,
    distinct_columns: Iterable[str] | str | None = None,
    limit: int | None = DEFAULT_DISTINCT_LIMIT,
) -> str:
    """Render a complete script as text.

    Raises:
        ValidationError: A distinct column reference or the limit is malformed.
        ValueError: *kind* is not a known script kind.
    """
    kind = ScriptKind(kind)
    dialect = get_dialect(kind.dialect_name)
    limit = validate_limit(limit)
    schema_ref = _schema_reference(kind, schema, dialect)

    refs: list[ColumnRef] = []
    if kind.samples_distincts:
        default_schema = schema or dialect.default_schema
        refs = parse_column_refs(distinct_columns, default_schema, require_schema=False)

    lines: list[str] = [_HEADERS[kind], ""]
    config = _config_block(kind, schema, limit)
    if config:
        lines.extend([*config, ""])

    if kind.samples_distincts:
        lines.extend([*_banner(kind, OVERVIEW_BANNER, first=True), ""])

    for query in get_catalog(kind.dialect_name).values():
        lines.extend(_banner(kind, query.title))
        lines.append(f"{query.bind(schema_ref)};")
        lines.append("")

    if kind.samples_distincts:
        lines.extend(_distinct_section(kind, dialect, refs, limit))
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


__all__ = [
    "ScriptKind",
    "render_script",
    "sql_literal",
    "OVERVIEW_BANNER",
    "DISTINCT_BANNER",
]
