"""
Column reference parsing for distinct-value sampling.

Operators list the columns to sample in one of the shapes the original
scripts accepted:

* comma-separated text, MySQL style: ``orders.status, users.role``
* a Postgres array literal: ``{"public.orders.status","public.users.role"}``
* a plain list of strings (CLI ``--column`` repeated)

Each reference is either ``table.column`` (schema = the default schema)
or ``schema.table.column``.  Identifiers containing dots are not supported,
matching ``split_part``/``SUBSTRING_INDEX`` in the scripts.
"""

from __future__ import annotations

from collections.abc import Iterable

from migrate_utils.core.errors import ValidationError
from migrate_utils.introspection.models import ColumnRef


def split_column_list(text: str | None) -> list[str]:
    """Split comma-separated text or a Postgres array literal into references.

    >>> split_column_list("orders.status , users.role")
    ['orders.status', 'users.role']
    >>> split_column_list('{"public.orders.status","public.users.role"}')
    ['public.orders.status', 'public.users.role']
    >>> split_column_list("{}")
    []
    """
    if text is None:
        return []
    body = text.strip()
    if body.startswith("{") and body.endswith("}"):
        body = body[1:-1]
    items = []
    for item in body.split(","):
        item = item.strip().strip('"').strip()
        if item:
            items.append(item)
    return items


def parse_column_ref(
    text: str,
    default_schema: str | None,
    *,
    require_schema: bool = True,
) -> ColumnRef:
    """Parse one ``table.column`` or ``schema.table.column`` reference.

    With ``require_schema=False`` a two-part reference and no default schema
    yields a ref with an empty schema, meaning "the current database".

    Raises:
        ValidationError: Wrong number of parts, an empty part, or a
            two-part reference with no default schema to apply.
    """
    raw = (text or "").strip()
    parts = [p.strip() for p in raw.split(".")]

    if len(parts) not in (2, 3) or not all(parts):
        raise ValidationError(
            f"Invalid column reference {raw!r}: expected table.column or schema.table.column",
            field="column_ref",
            value=raw,
        )

    if len(parts) == 2:
        if not default_schema and require_schema:
            raise ValidationError(
                f"Column reference {raw!r} has no schema and no default schema is known",
                field="column_ref",
                value=raw,
            )
        schema, (table, column) = default_schema or "", parts
    else:
        schema, table, column = parts

    return ColumnRef(schema=schema, table=table, column=column, label=raw)


def parse_column_refs(
    value: str | Iterable[str] | None,
    default_schema: str | None,
    *,
    require_schema: bool = True,
) -> list[ColumnRef]:
    """Parse every reference in *value*, keeping operator order and duplicates."""
    if value is None:
        return []
    if isinstance(value, str):
        items = split_column_list(value)
    else:
        items = [item for entry in value for item in split_column_list(entry)]
    return [
        parse_column_ref(item, default_schema, require_schema=require_schema)
        for item in items
    ]


__all__ = [
    "split_column_list",
    "parse_column_ref",
    "parse_column_refs",
]
