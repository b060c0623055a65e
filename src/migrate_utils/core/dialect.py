"""SQL dialect abstraction for introspection and sampling queries.

Provides a ``Dialect`` protocol and concrete implementations for every
supported backend.  The catalog and the distinct-value sampler use
``Dialect`` methods to build SQL fragments (placeholders, quoted
identifiers, ``LIMIT`` clauses) without touching a database driver.

Manifesto:
    Table and column names supplied by an operator end up inside dynamic
    SQL.  The original copy-paste scripts trusted them verbatim on MySQL
    and quoted them with ``format('%I')`` on PostgreSQL.  Every dialect here
    quotes identifiers, so a column called ``order`` or ``"weird name"``
    samples correctly on all backends.

Architecture::

    ┌──────────────┐ ┌──────────────┐ ┌──────────────┐
    │ SQLite       │ │ PostgreSQL   │ │ MySQL        │
    │ ?            │ │ %s           │ │ %s           │
    │ "ident"      │ │ "ident"      │ │ `ident`      │
    │ main         │ │ public       │ │ DATABASE()   │
    └──────────────┘ └──────────────┘ └──────────────┘

Examples:
    >>> from migrate_utils.core.dialect import get_dialect
    >>> d = get_dialect("mysql")
    >>> d.quote_identifier("order")
    '`order`'
    >>> d.qualified("shop", "orders")
    '`shop`.`orders`'

Tags:
    dialect, sql, identifiers, quoting, migrate-utils
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from migrate_utils.core.errors import ConfigError, ValidationError


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a **SQL fragment** that is valid for the target
    database.
    """

    @property
    def name(self) -> str:
        """Dialect name (``'sqlite'``, ``'postgresql'``, ``'mysql'``)."""
        ...

    @property
    def placeholder(self) -> str:
        """Positional bind-parameter marker for the driver."""
        ...

    @property
    def default_schema(self) -> str | None:
        """Schema used when the operator names none.

        ``None`` means "the database the connection is attached to", which
        only the adapter can resolve (MySQL).
        """
        ...

    def quote_identifier(self, name: str) -> str:
        """Quote a single identifier, escaping embedded quote characters."""
        ...

    def qualified(self, schema: str | None, table: str) -> str:
        """``schema.table`` with both parts quoted (schema optional)."""
        ...

    def limit_clause(self, limit: int | None) -> str:
        """`` LIMIT n`` or an empty string when *limit* is falsy."""
        ...


class _BaseDialect:
    """Shared identifier handling.  Subclasses set ``_quote``."""

    _quote = '"'

    def quote_identifier(self, name: str) -> str:
        if name is None or not str(name).strip():
            raise ValidationError("Identifier must not be empty", field="identifier", value=name)
        q = self._quote
        return f"{q}{str(name).replace(q, q + q)}{q}"

    def qualified(self, schema: str | None, table: str) -> str:
        if schema:
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table)

    def limit_clause(self, limit: int | None) -> str:
        if limit is None or limit <= 0:
            return ""
        return f" LIMIT {int(limit)}"


class SQLiteDialect(_BaseDialect):
    """SQLite dialect: ``?`` placeholders, double-quoted identifiers."""

    @property
    def name(self) -> str:
        return "sqlite"

    @property
    def placeholder(self) -> str:
        return "?"

    @property
    def default_schema(self) -> str | None:
        return "main"


class PostgreSQLDialect(_BaseDialect):
    """PostgreSQL dialect: ``%s`` placeholders (psycopg2), ``public`` schema."""

    @property
    def name(self) -> str:
        return "postgresql"

    @property
    def placeholder(self) -> str:
        return "%s"

    @property
    def default_schema(self) -> str | None:
        return "public"


class MySQLDialect(_BaseDialect):
    """MySQL / MariaDB dialect: ``%s`` placeholders, backtick identifiers.

    MySQL has no schema separate from the database, so the default schema
    is whatever ``DATABASE()`` returns for the connection.
    """

    _quote = "`"

    @property
    def name(self) -> str:
        return "mysql"

    @property
    def placeholder(self) -> str:
        return "%s"

    @property
    def default_schema(self) -> str | None:
        return None


_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "postgresql": PostgreSQLDialect(),
    "postgres": PostgreSQLDialect(),
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect(),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Accepts ``'sqlite'``, ``'postgresql'``, ``'postgres'``, ``'mysql'`` and
    ``'mariadb'`` (case-insensitive) or a ``DatabaseType`` member.

    Raises:
        ConfigError: If ``db_type`` is not recognised.
    """
    key = db_type.lower() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ConfigError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(set(_DIALECTS) - {'postgres', 'mariadb'})}"
        )
    return _DIALECTS[key]


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "PostgreSQLDialect",
    "MySQLDialect",
    "get_dialect",
]
