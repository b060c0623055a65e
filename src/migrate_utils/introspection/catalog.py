"""
Catalog queries: the schema overview, one SQL text per dialect and section.

Each query is written once with a ``{schema}`` slot.  The live inspector
binds the slot to a driver placeholder; the script renderer replaces it
with ``@db_name``, ``:'schema_name'`` or a quoted literal.  Both therefore
run exactly the same SQL.

Sections, in report order::

    tables         base tables, by name
    columns        name / type / nullability / default, by table + ordinal
    primary_keys   PK columns, by table + ordinal
    foreign_keys   FK columns and referenced column, by table + ordinal
    enums          enum labels (PostgreSQL pg_enum, MySQL enum(...) columns)

Every column is aliased to lower case so rows look the same from every
driver.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

SCHEMA_SLOT = "{schema}"


@dataclass(frozen=True, slots=True)
class CatalogQuery:
    """One section of the schema overview for one dialect."""

    section: str
    title: str
    sql: str

    @property
    def schema_slots(self) -> int:
        return self.sql.count(SCHEMA_SLOT)

    def bind(self, placeholder: str) -> str:
        """SQL with every schema slot replaced by *placeholder*."""
        return self.sql.replace(SCHEMA_SLOT, placeholder)


SECTION_TITLES: dict[str, str] = {
    "tables": "TABLES (BASE TABLES)",
    "columns": "COLUMNS (name, type, nullable, default)",
    "primary_keys": "PRIMARY KEYS",
    "foreign_keys": "FOREIGN KEYS",
    "enums": "ENUM TYPES (if any)",
}

# =============================================================================
# PostgreSQL
# =============================================================================

_PG_TABLES = """\
SELECT table_schema, table_name
FROM information_schema.tables
WHERE table_schema = {schema} AND table_type = 'BASE TABLE'
ORDER BY table_name"""

_PG_COLUMNS = """\
SELECT c.table_schema,
       c.table_name,
       c.column_name,
       c.data_type,
       c.is_nullable,
       c.column_default,
       c.ordinal_position
FROM information_schema.columns c
JOIN information_schema.tables t
  ON c.table_schema = t.table_schema AND c.table_name = t.table_name
WHERE c.table_schema = {schema} AND t.table_type = 'BASE TABLE'
ORDER BY c.table_name, c.ordinal_position"""

_PG_PRIMARY_KEYS = """\
SELECT kc.table_schema,
       kc.table_name,
       kc.constraint_name,
       kc.column_name,
       kc.ordinal_position
FROM information_schema.table_constraints tc
JOIN information_schema.key_column_usage kc
  ON kc.table_schema = tc.table_schema
 AND kc.table_name = tc.table_name
 AND kc.constraint_name = tc.constraint_name
WHERE tc.table_schema = {schema} AND tc.constraint_type = 'PRIMARY KEY'
ORDER BY kc.table_name, kc.ordinal_position"""

_PG_FOREIGN_KEYS = """\
SELECT tc.table_schema,
       tc.table_name,
       kcu.column_name,
       ccu.table_schema AS foreign_table_schema,
       ccu.table_name   AS foreign_table_name,
       ccu.column_name  AS foreign_column_name,
       tc.constraint_name
FROM information_schema.table_constraints AS tc
JOIN information_schema.key_column_usage AS kcu
  ON tc.constraint_name = kcu.constraint_name AND tc.table_schema = kcu.table_schema
JOIN information_schema.constraint_column_usage AS ccu
  ON ccu.constraint_name = tc.constraint_name AND ccu.table_schema = tc.table_schema
WHERE tc.table_schema = {schema} AND tc.constraint_type = 'FOREIGN KEY'
ORDER BY tc.table_name, kcu.ordinal_position"""

_PG_ENUMS = """\
SELECT n.nspname AS schema_name,
       t.typname AS enum_name,
       e.enumlabel AS enum_value
FROM pg_type t
JOIN pg_enum e ON t.oid = e.enumtypid
JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
WHERE n.nspname = {schema}
ORDER BY t.typname, e.enumsortorder"""

# =============================================================================
# MySQL / MariaDB
# =============================================================================

_MYSQL_TABLES = """\
SELECT TABLE_SCHEMA AS table_schema, TABLE_NAME AS table_name
FROM INFORMATION_SCHEMA.TABLES
WHERE TABLE_SCHEMA = {schema} AND TABLE_TYPE = 'BASE TABLE'
ORDER BY TABLE_NAME"""

_MYSQL_COLUMNS = """\
SELECT c.TABLE_SCHEMA     AS table_schema,
       c.TABLE_NAME       AS table_name,
       c.COLUMN_NAME      AS column_name,
       c.COLUMN_TYPE      AS data_type,
       c.IS_NULLABLE      AS is_nullable,
       c.COLUMN_DEFAULT   AS column_default,
       c.ORDINAL_POSITION AS ordinal_position
FROM INFORMATION_SCHEMA.COLUMNS c
         JOIN INFORMATION_SCHEMA.TABLES t
              ON c.TABLE_SCHEMA = t.TABLE_SCHEMA AND c.TABLE_NAME = t.TABLE_NAME
WHERE c.TABLE_SCHEMA = {schema} AND t.TABLE_TYPE = 'BASE TABLE'
ORDER BY c.TABLE_NAME, c.ORDINAL_POSITION"""

_MYSQL_PRIMARY_KEYS = """\
SELECT kcu.TABLE_SCHEMA     AS table_schema,
       kcu.TABLE_NAME       AS table_name,
       kcu.CONSTRAINT_NAME  AS constraint_name,
       kcu.COLUMN_NAME      AS column_name,
       kcu.ORDINAL_POSITION AS ordinal_position
FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
         JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
              ON kcu.CONSTRAINT_NAME = tc.CONSTRAINT_NAME
                  AND kcu.TABLE_SCHEMA = tc.TABLE_SCHEMA
                  AND kcu.TABLE_NAME = tc.TABLE_NAME
WHERE tc.TABLE_SCHEMA = {schema} AND tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
ORDER BY kcu.TABLE_NAME, kcu.ORDINAL_POSITION"""

_MYSQL_FOREIGN_KEYS = """\
SELECT kcu.TABLE_SCHEMA            AS table_schema,
       kcu.TABLE_NAME              AS table_name,
       kcu.COLUMN_NAME             AS column_name,
       kcu.REFERENCED_TABLE_SCHEMA AS foreign_table_schema,
       kcu.REFERENCED_TABLE_NAME   AS foreign_table_name,
       kcu.REFERENCED_COLUMN_NAME  AS foreign_column_name,
       kcu.CONSTRAINT_NAME         AS constraint_name
FROM INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
         JOIN INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
              ON tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
                  AND tc.TABLE_SCHEMA = kcu.TABLE_SCHEMA
                  AND tc.TABLE_NAME = kcu.TABLE_NAME
WHERE kcu.TABLE_SCHEMA = {schema}
  AND kcu.REFERENCED_TABLE_NAME IS NOT NULL
  AND tc.CONSTRAINT_TYPE = 'FOREIGN KEY'
ORDER BY kcu.TABLE_NAME, kcu.ORDINAL_POSITION"""

# MySQL has no standalone enum types; labels live in the column type.
_MYSQL_ENUMS = """\
SELECT TABLE_SCHEMA AS schema_name,
       TABLE_NAME   AS table_name,
       COLUMN_NAME  AS column_name,
       COLUMN_TYPE  AS column_type
FROM INFORMATION_SCHEMA.COLUMNS
WHERE TABLE_SCHEMA = {schema} AND DATA_TYPE = 'enum'
ORDER BY TABLE_NAME, ORDINAL_POSITION"""

# =============================================================================
# SQLite
# =============================================================================

_SQLITE_USER_TABLES = "m.type = 'table' AND m.name NOT LIKE 'sqlite_%'"

_SQLITE_TABLES = f"""\
SELECT {{schema}} AS table_schema, m.name AS table_name
FROM sqlite_master m
WHERE {_SQLITE_USER_TABLES}
ORDER BY m.name"""

_SQLITE_COLUMNS = f"""\
SELECT {{schema}} AS table_schema,
       m.name AS table_name,
       p.name AS column_name,
       p.type AS data_type,
       CASE WHEN p."notnull" = 1 OR p.pk > 0 THEN 'NO' ELSE 'YES' END AS is_nullable,
       p.dflt_value AS column_default,
       p.cid + 1 AS ordinal_position
FROM sqlite_master m
JOIN pragma_table_info(m.name) p
WHERE {_SQLITE_USER_TABLES}
ORDER BY m.name, p.cid"""

_SQLITE_PRIMARY_KEYS = f"""\
SELECT {{schema}} AS table_schema,
       m.name AS table_name,
       m.name || '_pkey' AS constraint_name,
       p.name AS column_name,
       p.pk AS ordinal_position
FROM sqlite_master m
JOIN pragma_table_info(m.name) p
WHERE {_SQLITE_USER_TABLES} AND p.pk > 0
ORDER BY m.name, p.pk"""

_SQLITE_FOREIGN_KEYS = f"""\
SELECT {{schema}} AS table_schema,
       m.name AS table_name,
       f."from" AS column_name,
       {{schema}} AS foreign_table_schema,
       f."table" AS foreign_table_name,
       COALESCE(f."to", '') AS foreign_column_name,
       m.name || '_fk_' || f.id AS constraint_name
FROM sqlite_master m
JOIN pragma_foreign_key_list(m.name) f
WHERE {_SQLITE_USER_TABLES}
ORDER BY m.name, f.id, f.seq"""


def _section(section: str, sql: str) -> CatalogQuery:
    return CatalogQuery(section=section, title=SECTION_TITLES[section], sql=sql)


CATALOG: dict[str, dict[str, CatalogQuery]] = {
    "postgresql": {
        "tables": _section("tables", _PG_TABLES),
        "columns": _section("columns", _PG_COLUMNS),
        "primary_keys": _section("primary_keys", _PG_PRIMARY_KEYS),
        "foreign_keys": _section("foreign_keys", _PG_FOREIGN_KEYS),
        "enums": _section("enums", _PG_ENUMS),
    },
    "mysql": {
        "tables": _section("tables", _MYSQL_TABLES),
        "columns": _section("columns", _MYSQL_COLUMNS),
        "primary_keys": _section("primary_keys", _MYSQL_PRIMARY_KEYS),
        "foreign_keys": _section("foreign_keys", _MYSQL_FOREIGN_KEYS),
        "enums": _section("enums", _MYSQL_ENUMS),
    },
    "sqlite": {
        "tables": _section("tables", _SQLITE_TABLES),
        "columns": _section("columns", _SQLITE_COLUMNS),
        "primary_keys": _section("primary_keys", _SQLITE_PRIMARY_KEYS),
        "foreign_keys": _section("foreign_keys", _SQLITE_FOREIGN_KEYS),
    },
}


def get_catalog(dialect_name: str) -> dict[str, CatalogQuery]:
    """Catalog queries for a dialect, keyed by section, in report order."""
    from migrate_utils.core.errors import ConfigError

    try:
        return CATALOG[dialect_name]
    except KeyError:
        raise ConfigError(f"No catalog queries for dialect '{dialect_name}'") from None


_ENUM_LABEL_RE = re.compile(r"'((?:[^'\\]|''|\\.)*)'")


def parse_mysql_enum(column_type: str) -> list[str]:
    """Labels of a MySQL ``enum(...)`` column type, in declaration order.

    >>> parse_mysql_enum("enum('new','it''s','done')")
    ['new', "it's", 'done']
    """
    text = column_type.strip()
    if not text.lower().startswith("enum(") or not text.endswith(")"):
        return []
    inner = text[5:-1]
    labels = []
    for match in _ENUM_LABEL_RE.finditer(inner):
        label = match.group(1).replace("''", "'")
        labels.append(re.sub(r"\\(.)", r"\1", label))
    return labels


__all__ = [
    "CATALOG",
    "SCHEMA_SLOT",
    "SECTION_TITLES",
    "CatalogQuery",
    "get_catalog",
    "parse_mysql_enum",
]
