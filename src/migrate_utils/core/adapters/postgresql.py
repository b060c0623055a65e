"""PostgreSQL database adapter.

Uses ``psycopg2`` with a small ``ThreadedConnectionPool``.  PostgreSQL uses
**format** (``%s``) placeholder style.

Install the driver::

    pip install psycopg2-binary
"""

from __future__ import annotations

from typing import Any

from migrate_utils.core.errors import ConfigError, DatabaseConnectionError

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


class PostgreSQLAdapter(DatabaseAdapter):
    """
    PostgreSQL database adapter.

    Sessions are opened read-only unless ``readonly=False``; every query
    ends its transaction with a rollback before the connection goes back to
    the pool, so nothing an introspection run does can be committed.
    """

    driver_module = "psycopg2"

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        pool_size: int = 2,
        connect_timeout: int = 10,
        readonly: bool = True,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.POSTGRESQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            pool_size=pool_size,
            connect_timeout=connect_timeout,
            readonly=readonly,
            options=kwargs,
        )
        super().__init__(config)
        self._pool: Any = None

    def connect(self) -> None:
        """Connect to PostgreSQL database."""
        try:
            import psycopg2
            import psycopg2.pool
        except ImportError:
            raise ConfigError(
                "psycopg2 is required for PostgreSQL. Install with: pip install psycopg2-binary"
            ) from None

        try:
            self._pool = psycopg2.pool.ThreadedConnectionPool(
                minconn=1,
                maxconn=max(1, self._config.pool_size),
                host=self._config.host,
                port=self._config.port,
                database=self._config.database,
                user=self._config.username,
                password=self._config.password,
                connect_timeout=self._config.connect_timeout,
                **self._config.options,
            )
            self._connected = True
        except psycopg2.Error as e:
            raise DatabaseConnectionError(
                f"Failed to connect to PostgreSQL: {e}",
                context={"url": self._config.to_url()},
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Close PostgreSQL connection pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
            self._connected = False

    def get_connection(self) -> Any:
        """Get connection from pool."""
        if not self._pool:
            self.connect()
        conn = self._pool.getconn()
        if self._config.readonly:
            conn.set_session(readonly=True)
        return conn

    def _return_connection(self, conn: Any) -> None:
        """Return connection to pool."""
        if self._pool:
            self._pool.putconn(conn)

    def _run_query(self, sql: str, params: tuple) -> list[dict[str, Any]]:
        conn = self.get_connection()
        try:
            with conn.cursor() as cursor:
                cursor.execute(sql, params or None)
                columns = [desc[0] for desc in cursor.description]
                return [dict(zip(columns, row, strict=False)) for row in cursor.fetchall()]
        finally:
            conn.rollback()
            self._return_connection(conn)


__all__ = [
    "PostgreSQLAdapter",
]
