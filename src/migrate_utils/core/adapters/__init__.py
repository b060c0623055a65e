"""Database adapters -- one read-only interface for three backends.

Manifesto:
    Schema introspection and distinct-value sampling must run the same way
    against the legacy MySQL/MariaDB or PostgreSQL database being migrated,
    and against SQLite files.  The adapter hides driver differences; the
    dialect hides SQL differences.

    Each adapter is **import-guarded**: the database driver is only required
    at ``connect()`` time, not at import time::

        pip install migrate-utils[postgresql]   # psycopg2-binary
        pip install migrate-utils[mysql]        # mysql-connector-python

Architecture::

    DatabaseAdapter (base.py)        Abstract base with connect/query
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- PostgreSQLAdapter        psycopg2 (optional)
        |-- MySQLAdapter             mysql.connector (optional)

    AdapterRegistry (registry.py)    DatabaseType -> adapter class
    DatabaseConfig (types.py)        Connection parameters
    DatabaseType (types.py)          Enum of supported backends

Guardrails:
    ❌ ``adapter.query("SELECT * FROM " + table)``
    ✅ ``adapter.query(f"SELECT * FROM {adapter.dialect.qualified(s, t)}")``
    ❌ Importing optional drivers at module scope
    ✅ Import-guarded at ``connect()`` time with clear ``ConfigError``

Tags:
    migrate-utils, database, adapters, postgresql, mysql, sqlite
"""

from migrate_utils.core.dialect import Dialect, get_dialect

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .registry import (
    AdapterRegistry,
    adapter_from_config,
    adapter_from_url,
    adapter_registry,
    get_adapter,
)
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    # Abstractions
    "Dialect",
    "get_dialect",
    "DatabaseAdapter",
    # Implementations
    "SQLiteAdapter",
    "PostgreSQLAdapter",
    "MySQLAdapter",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
    "adapter_from_config",
    "adapter_from_url",
]
