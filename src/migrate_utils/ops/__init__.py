"""
Operations layer: the functions the CLI and SDK callers use.

- All functions accept ``OperationContext`` as first argument
- All functions return ``OperationResult[T]`` (never raise)
- All functions are transport-agnostic (no CLI knowledge)

Usage::

    from migrate_utils.core.adapters import adapter_from_url
    from migrate_utils.ops import OperationContext
    from migrate_utils.ops.schema import dump_schema

    with adapter_from_url("postgresql://me@localhost/crm") as adapter:
        ctx = OperationContext(adapter=adapter, schema="public")
        result = dump_schema(ctx, ["public.orders.status"], limit=100)
        assert result.success
"""

from migrate_utils.ops.context import OperationContext
from migrate_utils.ops.result import OperationError, OperationResult
from migrate_utils.ops.schema import dump_schema, get_schema_overview, sample_distinct_values

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "get_schema_overview",
    "sample_distinct_values",
    "dump_schema",
]
