"""
Report rendering for schema overviews and distinct samples.

Three shapes:

* :func:`to_text` - the section layout the SQL scripts print, for diffing
  against a psql/mysql run.
* :func:`to_markdown` - one section per table with PK/FK markers, enum
  labels and distinct values; meant to be pasted into an AI assistant chat
  as context for migration and linting work.
* :func:`to_json_dict` - plain dict for ``--format json``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from migrate_utils.introspection.catalog import SECTION_TITLES
from migrate_utils.introspection.models import DistinctSample, SchemaOverview
from migrate_utils.introspection.scripts import DISTINCT_BANNER, OVERVIEW_BANNER

NO_DISTINCTS = "No columns configured for distinct sampling."


def _fmt(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bytes | bytearray):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _text_rows(header: list[str], rows: Iterable[list[Any]]) -> list[str]:
    cells = [[_fmt(v) for v in row] for row in rows]
    widths = [len(h) for h in header]
    for row in cells:
        widths = [max(w, len(c)) for w, c in zip(widths, row)]
    lines = [" | ".join(h.ljust(w) for h, w in zip(header, widths)).rstrip()]
    lines.append("-+-".join("-" * w for w in widths))
    for row in cells:
        lines.append(" | ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip())
    lines.append(f"({len(cells)} row{'s' if len(cells) != 1 else ''})")
    return lines


def _overview_text(overview: SchemaOverview) -> list[str]:
    lines = [OVERVIEW_BANNER, f"schema: {overview.schema_name} ({overview.dialect})", ""]

    lines.append(SECTION_TITLES["tables"])
    lines.extend(_text_rows(
        ["table_schema", "table_name"],
        ([t.table_schema, t.table_name] for t in overview.tables),
    ))
    lines.append("")

    lines.append(SECTION_TITLES["columns"])
    lines.extend(_text_rows(
        ["table_name", "column_name", "data_type", "is_nullable", "column_default"],
        (
            [c.table_name, c.column_name, c.data_type, c.is_nullable, c.column_default]
            for c in overview.columns
        ),
    ))
    lines.append("")

    lines.append(SECTION_TITLES["primary_keys"])
    lines.extend(_text_rows(
        ["table_name", "constraint_name", "column_name"],
        ([pk.table_name, pk.constraint_name, pk.column_name] for pk in overview.primary_keys),
    ))
    lines.append("")

    lines.append(SECTION_TITLES["foreign_keys"])
    lines.extend(_text_rows(
        ["table_name", "column_name", "foreign_table_name", "foreign_column_name", "constraint_name"],
        (
            [fk.table_name, fk.column_name, fk.foreign_table_name, fk.foreign_column_name, fk.constraint_name]
            for fk in overview.foreign_keys
        ),
    ))
    lines.append("")

    lines.append(SECTION_TITLES["enums"])
    lines.extend(_text_rows(
        ["schema_name", "enum_name", "enum_value"],
        ([e.schema_name, e.enum_name, e.enum_value] for e in overview.enums),
    ))
    return lines


def _distincts_text(samples: list[DistinctSample]) -> list[str]:
    lines = [DISTINCT_BANNER]
    if not samples:
        lines.append(NO_DISTINCTS)
        return lines
    for sample in samples:
        lines.append("")
        lines.append(f"--- DISTINCTS: {sample.column_ref.qualified} ---")
        lines.extend(_text_rows(["value", "freq"], ([v.value, v.freq] for v in sample.values)))
    return lines


def to_text(
    overview: SchemaOverview | None = None,
    samples: list[DistinctSample] | None = None,
) -> str:
    """Plain-text report in the scripts' section order.

    Pass ``samples=None`` to leave the distinct section out entirely and an
    empty list to print the "nothing configured" notice.
    """
    lines: list[str] = []
    if overview is not None:
        lines.extend(_overview_text(overview))
    if samples is not None:
        if lines:
            lines.append("")
        lines.extend(_distincts_text(samples))
    return "\n".join(lines) + "\n"


# =============================================================================
# Markdown
# =============================================================================


def _md_cell(value: Any) -> str:
    return _fmt(value).replace("|", "\\|").replace("\n", " ")


def _md_table(header: list[str], rows: Iterable[list[Any]]) -> list[str]:
    lines = ["| " + " | ".join(header) + " |", "|" + "|".join("---" for _ in header) + "|"]
    for row in rows:
        lines.append("| " + " | ".join(_md_cell(v) for v in row) + " |")
    return lines


def _md_samples(samples: list[DistinctSample]) -> list[str]:
    lines = ["## Distinct values", ""]
    if not samples:
        return lines + [f"_{NO_DISTINCTS}_", ""]
    for sample in samples:
        suffix = f" (top {sample.limit})" if sample.truncated else ""
        lines.append(f"### `{sample.column_ref.qualified}`{suffix}")
        lines.append("")
        lines.extend(_md_table(["value", "freq"], ([v.value, v.freq] for v in sample.values)))
        lines.append("")
    return lines


def to_markdown(
    overview: SchemaOverview | None = None,
    samples: list[DistinctSample] | None = None,
) -> str:
    """Markdown report, one section per table."""
    lines: list[str] = []

    if overview is not None:
        lines.extend([f"# Schema `{overview.schema_name}` ({overview.dialect})", ""])
        if not overview.tables:
            lines.extend(["_No base tables found._", ""])

        for table in overview.table_names:
            pk = set(overview.primary_key_for(table))
            fks = {fk.column_name: fk for fk in overview.foreign_keys_for(table)}
            lines.extend([f"## `{table}`", ""])

            rows = []
            for col in overview.columns_for(table):
                keys = []
                if col.column_name in pk:
                    keys.append("PK")
                if col.column_name in fks:
                    keys.append(f"FK -> {fks[col.column_name].target}")
                rows.append([
                    col.column_name,
                    col.data_type,
                    "yes" if col.nullable else "no",
                    col.column_default if col.column_default is not None else "",
                    ", ".join(keys),
                ])
            lines.extend(_md_table(["column", "type", "nullable", "default", "keys"], rows))
            lines.append("")

        enum_types = overview.enum_types()
        if enum_types:
            lines.extend(["## Enum types", ""])
            for name, labels in enum_types.items():
                lines.append(f"- `{name}`: " + ", ".join(f"`{label}`" for label in labels))
            lines.append("")

    if samples is not None:
        lines.extend(_md_samples(samples))

    return "\n".join(lines).rstrip() + "\n"


# =============================================================================
# JSON
# =============================================================================


def to_json_dict(
    overview: SchemaOverview | None = None,
    samples: list[DistinctSample] | None = None,
) -> dict[str, Any]:
    """JSON-ready dict; keys are present only for the parts supplied."""
    payload: dict[str, Any] = {}
    if overview is not None:
        payload["schema"] = overview.schema_name
        payload["dialect"] = overview.dialect
        payload["tables"] = [t.to_dict() for t in overview.tables]
        payload["columns"] = [c.to_dict() for c in overview.columns]
        payload["primary_keys"] = [pk.to_dict() for pk in overview.primary_keys]
        payload["foreign_keys"] = [fk.to_dict() for fk in overview.foreign_keys]
        payload["enums"] = [e.to_dict() for e in overview.enums]
    if samples is not None:
        payload["distincts"] = [s.to_dict() for s in samples]
    return payload


__all__ = [
    "NO_DISTINCTS",
    "to_text",
    "to_markdown",
    "to_json_dict",
]
