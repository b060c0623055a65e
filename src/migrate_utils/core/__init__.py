"""
Core primitives: errors, SQL dialects, database adapters and configuration.
"""

from migrate_utils.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    MigrateUtilsError,
    QueryError,
    ValidationError,
)

__all__ = [
    "ErrorCategory",
    "MigrateUtilsError",
    "ConfigError",
    "ValidationError",
    "DatabaseError",
    "DatabaseConnectionError",
    "QueryError",
]
