"""Tests for the distinct-value sampler."""

from __future__ import annotations

import pytest

from migrate_utils.core.dialect import get_dialect
from migrate_utils.core.errors import QueryError, ValidationError
from migrate_utils.introspection.models import ColumnRef
from migrate_utils.introspection.sampler import (
    DEFAULT_DISTINCT_LIMIT,
    DistinctSampler,
    build_distinct_query,
    validate_limit,
)

STATUS = ColumnRef("main", "orders", "status", "orders.status")


class TestValidateLimit:
    @pytest.mark.parametrize(("limit", "expected"), [(None, None), (0, None), (5, 5), (1000, 1000)])
    def test_valid(self, limit, expected):
        assert validate_limit(limit) == expected

    @pytest.mark.parametrize("limit", [-1, "10", 2.5, True])
    def test_invalid(self, limit):
        with pytest.raises(ValidationError):
            validate_limit(limit)

    def test_default(self):
        assert DEFAULT_DISTINCT_LIMIT == 1000


class TestBuildDistinctQuery:
    def test_postgres(self):
        ref = ColumnRef("public", "orders", "status")
        assert build_distinct_query(get_dialect("postgresql"), ref, 1000) == (
            'SELECT "status" AS value, COUNT(*) AS freq FROM "public"."orders" '
            'GROUP BY "status" ORDER BY freq DESC LIMIT 1000'
        )

    def test_mysql_backticks(self):
        ref = ColumnRef("shop", "order", "status")
        assert build_distinct_query(get_dialect("mysql"), ref, 10) == (
            "SELECT `status` AS value, COUNT(*) AS freq FROM `shop`.`order` "
            "GROUP BY `status` ORDER BY freq DESC LIMIT 10"
        )

    def test_mysql_without_schema(self):
        ref = ColumnRef("", "orders", "status")
        assert "FROM `orders` GROUP BY" in build_distinct_query(get_dialect("mysql"), ref)

    @pytest.mark.parametrize("limit", [None, 0])
    def test_no_limit(self, limit):
        sql = build_distinct_query(get_dialect("postgresql"), ColumnRef("public", "t", "c"), limit)
        assert "LIMIT" not in sql

    def test_hostile_identifier_is_quoted(self):
        ref = ColumnRef("public", "orders", 'status"; DROP TABLE orders; --')
        sql = build_distinct_query(get_dialect("postgresql"), ref)
        assert '"status""; DROP TABLE orders; --"' in sql


class TestDistinctSampler:
    def test_most_frequent_first(self, sqlite_adapter):
        sample = DistinctSampler(sqlite_adapter).sample(STATUS)
        assert [(v.value, v.freq) for v in sample.values] == [("new", 3), ("paid", 2), ("shipped", 1)]
        assert sample.total_rows == 6
        assert sample.truncated is False

    def test_limit_truncates(self, sqlite_adapter):
        sample = DistinctSampler(sqlite_adapter, limit=1).sample(STATUS)
        assert [v.value for v in sample.values] == ["new"]
        assert sample.truncated is True

    def test_zero_means_no_limit(self, sqlite_adapter):
        sampler = DistinctSampler(sqlite_adapter, limit=0)
        assert sampler.limit is None
        assert len(sampler.sample(STATUS).values) == 3

    def test_nulls_are_a_value(self, sqlite_adapter):
        ref = ColumnRef("main", "orders", "total")
        values = {v.value: v.freq for v in DistinctSampler(sqlite_adapter).sample(ref).values}
        assert values[None] == 1

    def test_sample_all_keeps_order(self, sqlite_adapter):
        refs = [STATUS, ColumnRef("main", "customers", "tier")]
        samples = DistinctSampler(sqlite_adapter).sample_all(refs)
        assert [s.column_ref.column for s in samples] == ["status", "tier"]
        assert samples[1].values[0].value == "free"

    def test_sample_all_empty(self, sqlite_adapter):
        assert DistinctSampler(sqlite_adapter).sample_all([]) == []

    def test_failure_stops_the_run(self, sqlite_adapter):
        refs = [ColumnRef("main", "nope", "status"), STATUS]
        with pytest.raises(QueryError) as exc_info:
            DistinctSampler(sqlite_adapter).sample_all(refs)
        assert exc_info.value.context["column_ref"] == "main.nope.status"

    def test_missing_column_is_an_error(self, sqlite_adapter):
        refs = [STATUS, ColumnRef("main", "orders", "no_such_column")]
        with pytest.raises(QueryError) as exc_info:
            DistinctSampler(sqlite_adapter).sample_all(refs)
        assert exc_info.value.context["column_ref"] == "main.orders.no_such_column"

    def test_to_dict(self, sqlite_adapter):
        d = DistinctSampler(sqlite_adapter, limit=2).sample(STATUS).to_dict()
        assert d["column_ref"] == "orders.status"
        assert d["qualified"] == "main.orders.status"
        assert d["truncated"] is True
        assert d["values"][0] == {"value": "new", "freq": 3}
