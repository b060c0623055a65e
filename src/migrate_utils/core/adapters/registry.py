"""Database adapter registry and factory.

Manifesto:
    Consumers should never hard-code adapter class names.  The registry
    maps ``DatabaseType`` strings to adapter classes, and the factories
    create a configured instance from keyword arguments, a
    :class:`DatabaseConfig` or a database URL.

Features:
    - ``AdapterRegistry`` singleton with pre-registered defaults
    - ``register()`` for custom / third-party adapters
    - ``get_adapter()``, ``adapter_from_config()``, ``adapter_from_url()``

Tags:
    migrate-utils, database, registry, factory
"""

from __future__ import annotations

from typing import Any

from migrate_utils.core.errors import ConfigError

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .postgresql import PostgreSQLAdapter
from .sqlite import SQLiteAdapter
from .types import DatabaseConfig, DatabaseType


class AdapterRegistry:
    """
    Registry for database adapter factories.

    Pre-registered adapters:
    - ``sqlite`` — :class:`SQLiteAdapter`
    - ``postgresql`` / ``postgres`` — :class:`PostgreSQLAdapter`
    - ``mysql`` / ``mariadb`` — :class:`MySQLAdapter`
    """

    def __init__(self):
        self._factories: dict[str, type[DatabaseAdapter]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default adapters."""
        self._factories["sqlite"] = SQLiteAdapter
        self._factories["postgresql"] = PostgreSQLAdapter
        self._factories["postgres"] = PostgreSQLAdapter  # Alias
        self._factories["mysql"] = MySQLAdapter
        self._factories["mariadb"] = MySQLAdapter  # Alias

    def register(self, name: str, adapter_class: type[DatabaseAdapter]) -> None:
        """Register an adapter factory."""
        self._factories[name.lower()] = adapter_class

    def create(self, name: str, **kwargs: Any) -> DatabaseAdapter:
        """Create an adapter by name."""
        name = name.lower()
        if name not in self._factories:
            raise ConfigError(f"Unknown database adapter: {name}")
        return self._factories[name](**kwargs)

    def adapter_class(self, name: str) -> type[DatabaseAdapter]:
        """Adapter class registered under *name*."""
        try:
            return self._factories[name.lower()]
        except KeyError:
            raise ConfigError(f"Unknown database adapter: {name}") from None

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(
    db_type: DatabaseType | str,
    **kwargs: Any,
) -> DatabaseAdapter:
    """
    Get a database adapter by type.

    Usage:
        adapter = get_adapter(DatabaseType.SQLITE, path="legacy.db")
        adapter = get_adapter("postgresql", host="localhost", database="crm")
    """
    if isinstance(db_type, DatabaseType):
        name = db_type.value
    else:
        name = db_type

    return adapter_registry.create(name, **kwargs)


def adapter_from_config(config: DatabaseConfig) -> DatabaseAdapter:
    """Create an adapter from a :class:`DatabaseConfig`."""
    if config.db_type == DatabaseType.SQLITE:
        return get_adapter(
            config.db_type,
            path=config.path or ":memory:",
            readonly=config.readonly,
            **config.options,
        )
    return get_adapter(
        config.db_type,
        host=config.host,
        port=config.port,
        database=config.database,
        username=config.username,
        password=config.password,
        pool_size=config.pool_size,
        connect_timeout=config.connect_timeout,
        readonly=config.readonly,
        **config.options,
    )


def adapter_from_url(url: str, **overrides: Any) -> DatabaseAdapter:
    """
    Create an adapter from a database URL.

    Usage:
        adapter = adapter_from_url("postgresql://me:pw@db:5432/crm")
        adapter = adapter_from_url("sqlite:///legacy.db")
    """
    from migrate_utils.core.config.urls import parse_database_url

    config = parse_database_url(url)
    for key, value in overrides.items():
        setattr(config, key, value)
    return adapter_from_config(config)


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
    "adapter_from_config",
    "adapter_from_url",
]
