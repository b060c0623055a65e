"""Tests for the introspection dataclasses' dict forms."""

from __future__ import annotations

from migrate_utils.introspection.models import (
    ColumnRef,
    DistinctSample,
    DistinctValue,
    SchemaDump,
    SchemaOverview,
    TableInfo,
)


class TestColumnRef:
    def test_to_dict(self):
        ref = ColumnRef("public", "orders", "status", "orders.status")
        assert ref.to_dict() == {
            "schema": "public",
            "table": "orders",
            "column": "status",
            "label": "orders.status",
            "qualified": "public.orders.status",
        }

    def test_to_dict_without_schema(self):
        assert ColumnRef("", "orders", "status").to_dict()["qualified"] == "orders.status"


class TestDistinctValue:
    def test_to_dict(self):
        assert DistinctValue(None, 4).to_dict() == {"value": None, "freq": 4}


class TestSchemaDump:
    def test_to_dict(self):
        overview = SchemaOverview("main", "sqlite", tables=[TableInfo("main", "orders")])
        sample = DistinctSample(ColumnRef("main", "orders", "status"), [DistinctValue("new", 3)], 10)
        d = SchemaDump(overview=overview, samples=[sample]).to_dict()
        assert d["overview"]["schema_name"] == "main"
        assert d["overview"]["tables"] == [{"table_schema": "main", "table_name": "orders"}]
        assert d["samples"][0]["qualified"] == "main.orders.status"
        assert d["samples"][0]["values"] == [{"value": "new", "freq": 3}]
