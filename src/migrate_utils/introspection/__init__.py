"""
Schema introspection: catalog queries, distinct sampling, scripts and reports.

Manifesto:
    A migration starts by looking at what is already there.  Everything in
    this package only reads: catalog views, ``GROUP BY`` counts, and text
    rendered from them.  Nothing creates, alters or writes.

Architecture:
    ::

        catalog.py    one SQL text per dialect + section, {schema} slot
             │
             ├──▶ inspector.py   binds the slot, maps rows into models
             │
             └──▶ scripts.py     renders copy-paste .sql for mysql / psql / GUIs

        refs.py       "table.column" / "schema.table.column" parsing
        sampler.py    SELECT col AS value, COUNT(*) AS freq ... per column
        report.py     text / markdown / json rendering

Tags:
    introspection, information_schema, pg_catalog, distinct-values
"""

from migrate_utils.introspection.catalog import CATALOG, CatalogQuery, get_catalog
from migrate_utils.introspection.inspector import SchemaInspector, resolve_schema
from migrate_utils.introspection.models import (
    ColumnInfo,
    ColumnRef,
    DistinctSample,
    DistinctValue,
    EnumLabel,
    ForeignKey,
    PrimaryKeyColumn,
    SchemaDump,
    SchemaOverview,
    TableInfo,
)
from migrate_utils.introspection.refs import (
    parse_column_ref,
    parse_column_refs,
    split_column_list,
)
from migrate_utils.introspection.sampler import (
    DEFAULT_DISTINCT_LIMIT,
    DistinctSampler,
    build_distinct_query,
    validate_limit,
)
from migrate_utils.introspection.scripts import ScriptKind, render_script

__all__ = [
    # catalog
    "CATALOG",
    "CatalogQuery",
    "get_catalog",
    # inspector
    "SchemaInspector",
    "resolve_schema",
    # models
    "TableInfo",
    "ColumnInfo",
    "PrimaryKeyColumn",
    "ForeignKey",
    "EnumLabel",
    "SchemaOverview",
    "ColumnRef",
    "DistinctValue",
    "DistinctSample",
    "SchemaDump",
    # refs
    "split_column_list",
    "parse_column_ref",
    "parse_column_refs",
    # sampler
    "DEFAULT_DISTINCT_LIMIT",
    "DistinctSampler",
    "build_distinct_query",
    "validate_limit",
    # scripts
    "ScriptKind",
    "render_script",
]
