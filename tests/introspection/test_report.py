"""Tests for text / markdown / JSON report rendering."""

from __future__ import annotations

import json

import pytest

from migrate_utils.introspection.models import (
    ColumnInfo,
    ColumnRef,
    DistinctSample,
    DistinctValue,
    EnumLabel,
    ForeignKey,
    PrimaryKeyColumn,
    SchemaOverview,
    TableInfo,
)
from migrate_utils.introspection.report import NO_DISTINCTS, to_json_dict, to_markdown, to_text


@pytest.fixture
def overview() -> SchemaOverview:
    return SchemaOverview(
        schema_name="public",
        dialect="postgresql",
        tables=[TableInfo("public", "customers"), TableInfo("public", "orders")],
        columns=[
            ColumnInfo("public", "customers", "id", "integer", "NO", None, 1),
            ColumnInfo("public", "orders", "id", "integer", "NO", "nextval('orders_id_seq'::regclass)", 1),
            ColumnInfo("public", "orders", "customer_id", "integer", "NO", None, 2),
            ColumnInfo("public", "orders", "status", "USER-DEFINED", "YES", None, 3),
        ],
        primary_keys=[
            PrimaryKeyColumn("public", "customers", "customers_pkey", "id", 1),
            PrimaryKeyColumn("public", "orders", "orders_pkey", "id", 1),
        ],
        foreign_keys=[
            ForeignKey("public", "orders", "customer_id", "public", "customers", "id", "orders_customer_id_fkey"),
        ],
        enums=[
            EnumLabel("public", "order_status", "new", 1),
            EnumLabel("public", "order_status", "paid", 2),
        ],
    )


@pytest.fixture
def samples() -> list[DistinctSample]:
    ref = ColumnRef("public", "orders", "status", "public.orders.status")
    return [DistinctSample(ref, [DistinctValue("new", 3), DistinctValue(None, 1)], limit=2)]


class TestText:
    def test_sections(self, overview, samples):
        text = to_text(overview, samples)
        for marker in (
            "=== SCHEMA OVERVIEW ===",
            "TABLES (BASE TABLES)",
            "COLUMNS (name, type, nullable, default)",
            "PRIMARY KEYS",
            "FOREIGN KEYS",
            "ENUM TYPES (if any)",
            "=== DISTINCT VALUES FOR SELECTED COLUMNS ===",
            "--- DISTINCTS: public.orders.status ---",
        ):
            assert marker in text

    def test_rows_and_counts(self, overview):
        text = to_text(overview)
        assert "(2 rows)" in text
        assert "orders_customer_id_fkey" in text
        assert "=== DISTINCT" not in text

    def test_null_rendered(self, samples):
        assert "NULL" in to_text(samples=samples)

    def test_no_distincts(self):
        assert NO_DISTINCTS in to_text(samples=[])


class TestMarkdown:
    def test_table_sections_with_keys(self, overview):
        md = to_markdown(overview)
        assert md.startswith("# Schema `public` (postgresql)")
        assert "## `orders`" in md
        assert "| customer_id | integer | no |  | FK -> customers.id |" in md
        assert "| id | integer | no | nextval('orders_id_seq'::regclass) | PK |" in md

    def test_enums(self, overview):
        assert "- `order_status`: `new`, `paid`" in to_markdown(overview)

    def test_distincts(self, samples):
        md = to_markdown(samples=samples)
        assert "### `public.orders.status` (top 2)" in md
        assert "| new | 3 |" in md
        assert "| NULL | 1 |" in md

    def test_pipes_escaped(self):
        ref = ColumnRef("public", "t", "c")
        md = to_markdown(samples=[DistinctSample(ref, [DistinctValue("a|b", 1)])])
        assert "| a\\|b | 1 |" in md

    def test_empty_schema(self):
        md = to_markdown(SchemaOverview(schema_name="empty", dialect="postgresql"))
        assert "_No base tables found._" in md


class TestJson:
    def test_overview_and_distincts(self, overview, samples):
        payload = to_json_dict(overview, samples)
        assert payload["schema"] == "public"
        assert [t["table_name"] for t in payload["tables"]] == ["customers", "orders"]
        assert payload["foreign_keys"][0]["foreign_table_name"] == "customers"
        assert payload["distincts"][0]["values"] == [
            {"value": "new", "freq": 3},
            {"value": None, "freq": 1},
        ]
        json.dumps(payload)

    def test_parts_omitted(self, samples):
        assert set(to_json_dict(samples=samples)) == {"distincts"}
