"""Tests for migrate_utils.core.errors module."""

import pytest

from migrate_utils.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    InvalidConfigError,
    MigrateUtilsError,
    MissingConfigError,
    QueryError,
    ValidationError,
)


class TestCategories:
    @pytest.mark.parametrize(
        ("cls", "category"),
        [
            (ConfigError, ErrorCategory.CONFIG),
            (MissingConfigError, ErrorCategory.CONFIG),
            (ValidationError, ErrorCategory.VALIDATION),
            (DatabaseError, ErrorCategory.DATABASE),
            (DatabaseConnectionError, ErrorCategory.DATABASE),
            (QueryError, ErrorCategory.DATABASE),
            (MigrateUtilsError, ErrorCategory.INTERNAL),
        ],
    )
    def test_default_category(self, cls, category):
        err = cls("x") if cls is not MissingConfigError else cls("database_url")
        assert err.category is category

    def test_explicit_category_wins(self):
        err = QueryError("boom", category=ErrorCategory.INTERNAL)
        assert err.category is ErrorCategory.INTERNAL

    def test_hierarchy(self):
        assert issubclass(QueryError, DatabaseError)
        assert issubclass(DatabaseConnectionError, DatabaseError)
        assert issubclass(InvalidConfigError, ConfigError)
        assert issubclass(ValidationError, MigrateUtilsError)


class TestMigrateUtilsError:
    def test_message_and_str(self):
        err = MigrateUtilsError("something broke")
        assert err.message == "something broke"
        assert str(err) == "something broke"

    def test_cause_is_chained(self):
        cause = RuntimeError("driver said no")
        err = QueryError("Query failed", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_with_context_is_fluent(self):
        err = QueryError("Query failed", context={"sql": "SELECT 1"})
        same = err.with_context(column_ref="public.orders.status")
        assert same is err
        assert err.context == {"sql": "SELECT 1", "column_ref": "public.orders.status"}

    def test_to_dict(self):
        err = QueryError("Query failed", context={"sql": "SELECT 1"}, cause=RuntimeError("nope"))
        d = err.to_dict()
        assert d["error_type"] == "QueryError"
        assert d["message"] == "Query failed"
        assert d["category"] == "DATABASE"
        assert d["context"] == {"sql": "SELECT 1"}
        assert d["cause"] == "nope"

    def test_to_dict_omits_empty_parts(self):
        d = MigrateUtilsError("x").to_dict()
        assert "context" not in d
        assert "cause" not in d

    def test_repr(self):
        assert repr(ConfigError("bad")) == "ConfigError('bad', category=CONFIG)"


class TestConfigErrors:
    def test_missing_config(self):
        err = MissingConfigError("database_url")
        assert err.key == "database_url"
        assert "database_url" in err.message

    def test_invalid_config(self):
        err = InvalidConfigError("connect_timeout", "soon")
        assert err.key == "connect_timeout"
        assert err.value == "soon"
        assert "'soon'" in err.message


class TestValidationError:
    def test_field_and_value_in_dict(self):
        err = ValidationError("Invalid column reference", field="column_ref", value="orders")
        d = err.to_dict()
        assert d["field"] == "column_ref"
        assert d["value"] == "'orders'"
