"""
Structured error types for migrate-utils.

Every failure the library reports is a :class:`MigrateUtilsError` carrying an
:class:`ErrorCategory`, a small metadata dict and the chained driver
exception.  Nothing here is retried: introspection and sampling are
single-shot, so errors exist to be classified and reported, not recovered.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      MigrateUtilsError                        │
        │              (category, context, cause)                       │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ConfigError          ValidationError      DatabaseError      │
        │  (CONFIG)             (VALIDATION)         (DATABASE)         │
        │     │                                         │               │
        │  MissingConfigError                       QueryError          │
        │  InvalidConfigError                DatabaseConnectionError    │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> err = QueryError("relation does not exist").with_context(sql="SELECT 1")
    >>> err.to_dict()["category"]
    'DATABASE'

Guardrails:
    ❌ DON'T: Raise bare ``Exception`` from adapters or samplers
    ✅ DO: Wrap driver errors with ``cause=`` so the traceback survives

Tags:
    error-handling, exception-hierarchy, migrate-utils
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for reporting and CLI exit messages."""

    CONFIG = "CONFIG"  # Missing config, invalid settings, missing driver
    VALIDATION = "VALIDATION"  # Bad column reference, bad limit
    DATABASE = "DATABASE"  # Connection or query failure
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


class MigrateUtilsError(Exception):
    """
    Base exception for all migrate-utils errors.

    Subclasses set ``default_category``.  ``context`` holds small key/value
    pairs (SQL text, column reference, URL without password) that are
    useful in logs; never put credentials in it.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> MigrateUtilsError:
        """
        Add context to this error (fluent API).

        Usage:
            raise QueryError("Failed").with_context(sql=sql, column="orders.status")
        """
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(MigrateUtilsError):
    """
    Configuration error.

    Raised for unknown adapters, unsupported URLs and missing database
    drivers.  Configuration must be fixed before anything can run.
    """

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"Missing required configuration: {key}")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(MigrateUtilsError):
    """Operator input (column reference, limit, identifier) is malformed."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


# =============================================================================
# DATABASE ERRORS
# =============================================================================


class DatabaseError(MigrateUtilsError):
    """Database query or connection error."""

    default_category = ErrorCategory.DATABASE


class DatabaseConnectionError(DatabaseError):
    """Could not open a connection (or pool) to the database."""


class QueryError(DatabaseError):
    """The engine rejected an introspection or sampling query."""


__all__ = [
    "ErrorCategory",
    "MigrateUtilsError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "ValidationError",
    "DatabaseError",
    "DatabaseConnectionError",
    "QueryError",
]
