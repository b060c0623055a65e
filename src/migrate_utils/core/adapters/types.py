"""Database types and configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

from migrate_utils.core.errors import ConfigError


class DatabaseType(str, Enum):
    """Supported database types."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


DEFAULT_PORTS: dict[DatabaseType, int] = {
    DatabaseType.POSTGRESQL: 5432,
    DatabaseType.MYSQL: 3306,
}


@dataclass
class DatabaseConfig:
    """
    Configuration for a database connection.

    Different fields are used by different database types.
    """

    # Common
    db_type: DatabaseType = DatabaseType.SQLITE

    # SQLite
    path: str | None = None

    # PostgreSQL / MySQL
    host: str = "localhost"
    port: int = 5432
    database: str = ""
    username: str | None = None
    password: str | None = None

    # Connection pool
    pool_size: int = 2

    # Options
    connect_timeout: int = 10
    readonly: bool = True

    # Extra options (driver-specific)
    options: dict[str, Any] = field(default_factory=dict)

    def to_url(self, *, mask_password: bool = True) -> str:
        """Render the config as a URL, hiding the password by default."""
        match self.db_type:
            case DatabaseType.SQLITE:
                return f"sqlite:///{self.path or ':memory:'}"
            case DatabaseType.POSTGRESQL | DatabaseType.MYSQL:
                auth = ""
                if self.username:
                    auth = quote(self.username, safe="")
                    if self.password:
                        secret = "***" if mask_password else quote(self.password, safe="")
                        auth += f":{secret}"
                    auth += "@"
                return f"{self.db_type.value}://{auth}{self.host}:{self.port}/{self.database}"
            case _:
                raise ConfigError(f"URL not supported for: {self.db_type}")


__all__ = [
    "DatabaseType",
    "DatabaseConfig",
    "DEFAULT_PORTS",
]
