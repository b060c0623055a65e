"""MySQL / MariaDB database adapter.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package.
MySQL uses **format** (``%s``) placeholder style.

Install the driver::

    pip install mysql-connector-python

This adapter is import-guarded: if ``mysql.connector`` is not installed
a clear :class:`~migrate_utils.core.errors.ConfigError` is raised at
``connect()`` time.
"""

from __future__ import annotations

from typing import Any

from migrate_utils.core.errors import ConfigError, DatabaseConnectionError

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType


def _driver_options(options: dict[str, Any]) -> dict[str, Any]:
    """Connector keyword arguments from URL query options.

    ``true``/``false`` strings become booleans so that
    ``?ssl_disabled=false`` means what it says.
    """
    out: dict[str, Any] = {}
    for key, value in options.items():
        if isinstance(value, str) and value.lower() in ("true", "false"):
            value = value.lower() == "true"
        out[key] = value
    out.setdefault("charset", "utf8mb4")
    return out


class MySQLAdapter(DatabaseAdapter):
    """MySQL / MariaDB database adapter.

    Uses ``mysql.connector`` connection pooling and dictionary cursors.
    """

    driver_module = "mysql.connector"

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        pool_size: int = 2,
        connect_timeout: int = 10,
        readonly: bool = True,
        charset: str = "utf8mb4",
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.MYSQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            pool_size=pool_size,
            connect_timeout=connect_timeout,
            readonly=readonly,
            options={**(kwargs or {}), "charset": charset},
        )
        super().__init__(config)
        self._pool: Any = None

    def connect(self) -> None:
        """Connect to MySQL database."""
        try:
            import mysql.connector  # noqa: F401
            from mysql.connector import pooling
        except ImportError:
            raise ConfigError(
                "mysql-connector-python is required for MySQL. "
                "Install with: pip install mysql-connector-python"
            ) from None

        try:
            self._pool = pooling.MySQLConnectionPool(
                pool_name="migrate_utils_mysql_pool",
                pool_size=max(1, self._config.pool_size),
                host=self._config.host,
                port=self._config.port,
                database=self._config.database or None,
                user=self._config.username,
                password=self._config.password,
                connect_timeout=self._config.connect_timeout,
                autocommit=True,
                **_driver_options(self._config.options),
            )
            self._connected = True
        except Exception as e:
            raise DatabaseConnectionError(
                f"Failed to connect to MySQL: {e}",
                context={"url": self._config.to_url()},
                cause=e,
            ) from e

    def disconnect(self) -> None:
        """Drop the MySQL connection pool."""
        # mysql.connector pools have no closeall(); pooled connections are
        # closed as they are returned.
        self._pool = None
        self._connected = False

    def get_connection(self) -> Any:
        """Get connection from pool."""
        if not self._pool:
            self.connect()
        return self._pool.get_connection()

    def _return_connection(self, conn: Any) -> None:
        """Return connection to pool (``close()`` on a pooled connection)."""
        conn.close()

    def _run_query(self, sql: str, params: tuple) -> list[dict[str, Any]]:
        conn = self.get_connection()
        try:
            cursor = conn.cursor(dictionary=True)
            try:
                if self._config.readonly:
                    cursor.execute("SET SESSION TRANSACTION READ ONLY")
                cursor.execute(sql, params or None)
                return list(cursor.fetchall())
            finally:
                cursor.close()
        finally:
            self._return_connection(conn)


__all__ = [
    "MySQLAdapter",
]
