"""
Schema operations.

Thin wrappers around :mod:`migrate_utils.introspection` that turn typed
errors into :class:`OperationResult` failures with a stable code:

=============================  ======================
Exception                      Code
=============================  ======================
ConfigError                    ``CONFIG_ERROR``
ValidationError                ``VALIDATION_FAILED``
DatabaseConnectionError        ``CONNECTION_FAILED``
QueryError / DatabaseError     ``QUERY_FAILED``
anything else                  ``INTERNAL``
=============================  ======================
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from migrate_utils.core.errors import (
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    ErrorCategory,
    MigrateUtilsError,
    ValidationError,
)
from migrate_utils.introspection.inspector import SchemaInspector, resolve_schema
from migrate_utils.introspection.models import DistinctSample, SchemaDump, SchemaOverview
from migrate_utils.introspection.refs import parse_column_refs
from migrate_utils.introspection.sampler import DEFAULT_DISTINCT_LIMIT, DistinctSampler
from migrate_utils.observability.logging import get_logger
from migrate_utils.ops.context import OperationContext
from migrate_utils.ops.result import OperationResult, _Timer, start_timer

logger = get_logger(__name__)

NO_COLUMNS_WARNING = "No columns configured for distinct sampling."


def error_code(exc: MigrateUtilsError) -> str:
    """Stable result code for a typed error."""
    if isinstance(exc, ConfigError):
        return "CONFIG_ERROR"
    if isinstance(exc, ValidationError):
        return "VALIDATION_FAILED"
    if isinstance(exc, DatabaseConnectionError):
        return "CONNECTION_FAILED"
    if isinstance(exc, DatabaseError):
        return "QUERY_FAILED"
    return "INTERNAL"


def _fail[T](ctx: OperationContext, op: str, exc: Exception, timer: _Timer) -> OperationResult[T]:
    log = logger.bind(op=op, request_id=ctx.request_id, caller=ctx.caller)
    if isinstance(exc, MigrateUtilsError):
        log.error("op_failed", error=exc.message, category=exc.category.value, **exc.context)
        return OperationResult.fail(
            error_code(exc),
            exc.message,
            category=exc.category,
            details={k: str(v) for k, v in exc.context.items()},
            elapsed_ms=timer.elapsed_ms,
            metadata=_metadata(ctx),
        )
    log.exception("op_failed", error=str(exc))
    return OperationResult.fail(
        "INTERNAL",
        f"Unexpected error: {exc}",
        category=ErrorCategory.INTERNAL,
        elapsed_ms=timer.elapsed_ms,
        metadata=_metadata(ctx),
    )


def _metadata(ctx: OperationContext) -> dict[str, str]:
    return {"request_id": ctx.request_id, "dialect": ctx.adapter.dialect.name}


def _propagate[T](
    ctx: OperationContext, failed: OperationResult, warnings: list[str], timer: _Timer
) -> OperationResult[T]:
    """Re-wrap a failed step result for a composed operation."""
    err = failed.error
    return OperationResult.fail(
        err.code,
        err.message,
        category=err.category,
        details=err.details,
        warnings=warnings,
        elapsed_ms=timer.elapsed_ms,
        metadata=_metadata(ctx),
    )


def get_schema_overview(ctx: OperationContext) -> OperationResult[SchemaOverview]:
    """Tables, columns, primary keys, foreign keys and enums of one schema."""
    timer = start_timer()
    try:
        overview = SchemaInspector(ctx.adapter, ctx.schema).overview()
    except Exception as exc:
        return _fail(ctx, "get_schema_overview", exc, timer)

    warnings = []
    if not overview.tables:
        warnings.append(f"No base tables found in schema '{overview.schema_name}'.")
    return OperationResult.ok(
        overview,
        warnings=warnings,
        elapsed_ms=timer.elapsed_ms,
        metadata=_metadata(ctx),
    )


def sample_distinct_values(
    ctx: OperationContext,
    columns: Iterable[str] | str | None,
    limit: int | None = DEFAULT_DISTINCT_LIMIT,
) -> OperationResult[list[DistinctSample]]:
    """Distinct values and frequencies for each column reference.

    ``limit`` of ``0`` or ``None`` returns every distinct value.  An empty
    column list succeeds with no samples and a warning.
    """
    timer = start_timer()
    try:
        sampler = DistinctSampler(ctx.adapter, limit)
        refs = parse_column_refs(columns, None, require_schema=False)
        if any(not ref.schema for ref in refs):
            default_schema = resolve_schema(ctx.adapter, ctx.schema)
            refs = [ref if ref.schema else replace(ref, schema=default_schema) for ref in refs]
        samples = sampler.sample_all(refs)
    except Exception as exc:
        return _fail(ctx, "sample_distinct_values", exc, timer)

    warnings = [] if samples else [NO_COLUMNS_WARNING]
    return OperationResult.ok(
        samples,
        warnings=warnings,
        elapsed_ms=timer.elapsed_ms,
        metadata=_metadata(ctx),
    )


def dump_schema(
    ctx: OperationContext,
    columns: Iterable[str] | str | None = None,
    limit: int | None = DEFAULT_DISTINCT_LIMIT,
) -> OperationResult[SchemaDump]:
    """Schema overview followed by distinct samples, as the full scripts print."""
    timer = start_timer()

    overview_result = get_schema_overview(ctx)
    if not overview_result.success:
        return _propagate(ctx, overview_result, overview_result.warnings, timer)

    samples_result = sample_distinct_values(ctx, columns, limit)
    if not samples_result.success:
        return _propagate(
            ctx, samples_result, overview_result.warnings + samples_result.warnings, timer
        )

    return OperationResult.ok(
        SchemaDump(overview=overview_result.data, samples=samples_result.data or []),
        warnings=overview_result.warnings + samples_result.warnings,
        elapsed_ms=timer.elapsed_ms,
        metadata=_metadata(ctx),
    )


__all__ = [
    "NO_COLUMNS_WARNING",
    "error_code",
    "get_schema_overview",
    "sample_distinct_values",
    "dump_schema",
]
