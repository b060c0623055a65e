"""Database adapter base class.

Manifesto:
    Introspection must not care which vendor it is talking to.  All
    adapters share a common lifecycle (connect/disconnect), a read-only
    ``query()`` that returns rows as dicts, and the dialect that knows how
    to quote identifiers for that backend.

Features:
    - Abstract ``connect()``, ``disconnect()``, ``get_connection()``
    - ``query()`` / ``query_one()`` returning ``list[dict]``
    - Driver errors wrapped in :class:`QueryError` with the SQL attached
    - Context-manager protocol for connection lifecycle

Tags:
    migrate-utils, database, abstract-base, adapter-pattern
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from migrate_utils.core.dialect import Dialect, get_dialect
from migrate_utils.core.errors import MigrateUtilsError, QueryError
from migrate_utils.observability.logging import ensure_logging, get_logger

from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Subclasses implement connection handling and ``_run_query``; the base
    class adds error wrapping and logging.
    """

    #: Import name of the DB-API driver, for `migrate-utils adapters`.
    driver_module: str = ""

    def __init__(self, config: DatabaseConfig):
        ensure_logging()
        self._config = config
        self._connected = False
        self._dialect: Dialect = get_dialect(config.db_type.value)

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._config.db_type

    @property
    def database(self) -> str:
        """Database name the adapter connects to (path for SQLite)."""
        return self._config.database or (self._config.path or "")

    @property
    def is_connected(self) -> bool:
        """Whether adapter is connected."""
        return self._connected

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to database."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to database."""
        ...

    @abstractmethod
    def get_connection(self) -> Any:
        """Get a connection (may be from pool)."""
        ...

    @abstractmethod
    def _run_query(self, sql: str, params: tuple) -> list[dict[str, Any]]:
        """Run *sql* with the driver and return rows as dicts."""
        ...

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        logger.debug("db.query", db_type=self.db_type.value, sql=sql, params=params)
        try:
            return self._run_query(sql, params)
        except MigrateUtilsError:
            raise
        except Exception as e:
            raise QueryError(
                f"Query failed on {self.db_type.value}: {e}",
                context={"sql": sql},
                cause=e,
            ) from e

    def query_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute query and return single result."""
        results = self.query(sql, params)
        return results[0] if results else None

    def __enter__(self) -> DatabaseAdapter:
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "DatabaseAdapter",
]
