"""
Schema inspector: runs the catalog queries and maps rows into models.

Usage:
    from migrate_utils.core.adapters import adapter_from_url
    from migrate_utils.introspection import SchemaInspector

    with adapter_from_url("postgresql://me@localhost/crm") as adapter:
        overview = SchemaInspector(adapter, schema="public").overview()

An unknown schema is not an error: every section simply comes back empty.
"""

from __future__ import annotations

from typing import Any

from migrate_utils.core.adapters.base import DatabaseAdapter
from migrate_utils.core.errors import ConfigError
from migrate_utils.introspection.catalog import CatalogQuery, get_catalog, parse_mysql_enum
from migrate_utils.introspection.models import (
    ColumnInfo,
    EnumLabel,
    ForeignKey,
    PrimaryKeyColumn,
    SchemaOverview,
    TableInfo,
)
from migrate_utils.observability.logging import get_logger
from migrate_utils.observability.timing import log_step

logger = get_logger(__name__)


def _text(value: Any) -> Any:
    # mysql-connector may hand back bytes for some information_schema columns
    if isinstance(value, bytes | bytearray):
        return value.decode("utf-8")
    return value


def _int(value: Any) -> int:
    return int(value) if value is not None else 0


def resolve_schema(adapter: DatabaseAdapter, schema: str | None = None) -> str:
    """Schema to inspect: explicit, dialect default, or ``DATABASE()`` on MySQL."""
    if schema:
        return schema
    default = adapter.dialect.default_schema
    if default:
        return default
    if adapter.config.database:
        return adapter.config.database
    row = adapter.query_one("SELECT DATABASE() AS db")
    current = _text(row["db"]) if row else None
    if not current:
        raise ConfigError(
            "No schema given and the connection has no current database; "
            "pass --schema or put the database name in the URL"
        )
    return current


class SchemaInspector:
    """Runs the schema overview queries for one schema."""

    def __init__(self, adapter: DatabaseAdapter, schema: str | None = None):
        self._adapter = adapter
        self._catalog = get_catalog(adapter.dialect.name)
        self._schema = resolve_schema(adapter, schema)

    @property
    def schema(self) -> str:
        return self._schema

    def _rows(self, section: str) -> list[dict[str, Any]]:
        query: CatalogQuery | None = self._catalog.get(section)
        if query is None:
            return []
        sql = query.bind(self._adapter.dialect.placeholder)
        params = (self._schema,) * query.schema_slots
        with log_step(f"catalog.{section}", level="debug", schema=self._schema) as timer:
            rows = self._adapter.query(sql, params)
            timer.add_metric("rows", len(rows))
        return [{k.lower(): _text(v) for k, v in row.items()} for row in rows]

    def tables(self) -> list[TableInfo]:
        return [
            TableInfo(table_schema=r["table_schema"], table_name=r["table_name"])
            for r in self._rows("tables")
        ]

    def columns(self) -> list[ColumnInfo]:
        return [
            ColumnInfo(
                table_schema=r["table_schema"],
                table_name=r["table_name"],
                column_name=r["column_name"],
                data_type=r["data_type"] or "",
                is_nullable=r["is_nullable"],
                column_default=None if r["column_default"] is None else str(r["column_default"]),
                ordinal_position=_int(r["ordinal_position"]),
            )
            for r in self._rows("columns")
        ]

    def primary_keys(self) -> list[PrimaryKeyColumn]:
        return [
            PrimaryKeyColumn(
                table_schema=r["table_schema"],
                table_name=r["table_name"],
                constraint_name=r["constraint_name"],
                column_name=r["column_name"],
                ordinal_position=_int(r["ordinal_position"]),
            )
            for r in self._rows("primary_keys")
        ]

    def foreign_keys(self) -> list[ForeignKey]:
        return [
            ForeignKey(
                table_schema=r["table_schema"],
                table_name=r["table_name"],
                column_name=r["column_name"],
                foreign_table_schema=r["foreign_table_schema"],
                foreign_table_name=r["foreign_table_name"],
                foreign_column_name=r["foreign_column_name"],
                constraint_name=r["constraint_name"],
            )
            for r in self._rows("foreign_keys")
        ]

    def enums(self) -> list[EnumLabel]:
        rows = self._rows("enums")
        labels: list[EnumLabel] = []

        if self._adapter.dialect.name == "mysql":
            for r in rows:
                enum_name = f"{r['table_name']}.{r['column_name']}"
                for i, value in enumerate(parse_mysql_enum(r["column_type"]), start=1):
                    labels.append(EnumLabel(r["schema_name"], enum_name, value, i))
            return labels

        positions: dict[str, int] = {}
        for r in rows:
            position = positions.get(r["enum_name"], 0) + 1
            positions[r["enum_name"]] = position
            labels.append(EnumLabel(r["schema_name"], r["enum_name"], r["enum_value"], position))
        return labels

    def overview(self) -> SchemaOverview:
        """Run every section and return the full overview."""
        with log_step("catalog.overview", schema=self._schema) as timer:
            overview = SchemaOverview(
                schema_name=self._schema,
                dialect=self._adapter.dialect.name,
                tables=self.tables(),
                columns=self.columns(),
                primary_keys=self.primary_keys(),
                foreign_keys=self.foreign_keys(),
                enums=self.enums(),
            )
            timer.add_metric("tables", len(overview.tables))
            timer.add_metric("columns", len(overview.columns))
        if not overview.tables:
            logger.warning("catalog.empty_schema", schema=self._schema)
        return overview


__all__ = [
    "SchemaInspector",
    "resolve_schema",
]
