"""Tests for column reference parsing."""

from __future__ import annotations

import pytest

from migrate_utils.core.errors import ValidationError
from migrate_utils.introspection.models import ColumnRef
from migrate_utils.introspection.refs import parse_column_ref, parse_column_refs, split_column_list


class TestSplitColumnList:
    def test_comma_separated(self):
        assert split_column_list("orders.status , users.role,") == ["orders.status", "users.role"]

    def test_array_literal(self):
        assert split_column_list('{"public.orders.status","public.users.role"}') == [
            "public.orders.status",
            "public.users.role",
        ]

    @pytest.mark.parametrize("text", [None, "", "{}", " , "])
    def test_empty(self, text):
        assert split_column_list(text) == []


class TestParseColumnRef:
    def test_three_parts(self):
        ref = parse_column_ref("sales.orders.status", "public")
        assert ref == ColumnRef("sales", "orders", "status", "sales.orders.status")
        assert ref.qualified == "sales.orders.status"

    def test_two_parts_use_default_schema(self):
        ref = parse_column_ref("orders.status", "shop")
        assert (ref.schema, ref.table, ref.column) == ("shop", "orders", "status")
        assert str(ref) == "orders.status"
        assert ref.qualified == "shop.orders.status"

    def test_two_parts_without_schema(self):
        with pytest.raises(ValidationError, match="no default schema"):
            parse_column_ref("orders.status", None)

    def test_two_parts_schema_optional(self):
        ref = parse_column_ref("orders.status", None, require_schema=False)
        assert ref.schema == ""
        assert ref.qualified == "orders.status"

    @pytest.mark.parametrize("text", ["status", "a.b.c.d", "orders.", ".status", "a..c", ""])
    def test_malformed(self, text):
        with pytest.raises(ValidationError) as exc_info:
            parse_column_ref(text, "public")
        assert exc_info.value.field == "column_ref"

    def test_whitespace_trimmed(self):
        ref = parse_column_ref("  public . orders . status ", None)
        assert ref.qualified == "public.orders.status"


class TestParseColumnRefs:
    def test_from_text(self):
        refs = parse_column_refs("orders.status, users.role", "shop")
        assert [r.qualified for r in refs] == ["shop.orders.status", "shop.users.role"]

    def test_from_list_keeps_order_and_duplicates(self):
        refs = parse_column_refs(["b.x", "a.y", "b.x"], "public")
        assert [str(r) for r in refs] == ["b.x", "a.y", "b.x"]

    def test_list_entries_may_hold_several(self):
        refs = parse_column_refs(["a.x,b.y", "c.z"], "public")
        assert len(refs) == 3

    def test_none(self):
        assert parse_column_refs(None, "public") == []
