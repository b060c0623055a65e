"""
Distinct-value sampler.

For each operator-supplied column reference, runs::

    SELECT <column> AS value, COUNT(*) AS freq
    FROM <schema>.<table>
    GROUP BY <column>
    ORDER BY freq DESC
    [LIMIT n]

Identifiers are quoted by the dialect, never bound as parameters (SQL
cannot bind identifiers).  The run is sequential and single-shot: the
first failing column stops it with a :class:`QueryError`.  Values tied on
frequency come back in whatever order the engine returns them.
"""

from __future__ import annotations

from collections.abc import Iterable

from migrate_utils.core.adapters.base import DatabaseAdapter
from migrate_utils.core.dialect import Dialect
from migrate_utils.core.errors import MigrateUtilsError, ValidationError
from migrate_utils.introspection.models import ColumnRef, DistinctSample, DistinctValue
from migrate_utils.observability.logging import get_logger
from migrate_utils.observability.timing import log_step

logger = get_logger(__name__)

DEFAULT_DISTINCT_LIMIT = 1000


def validate_limit(limit: int | None) -> int | None:
    """``None``/``0`` mean no limit; negative values are rejected."""
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"Distinct limit must be an integer, got {limit!r}", field="limit", value=limit)
    if limit < 0:
        raise ValidationError(f"Distinct limit must be >= 0, got {limit}", field="limit", value=limit)
    return limit or None


def build_distinct_query(dialect: Dialect, ref: ColumnRef, limit: int | None = None) -> str:
    """SQL that returns ``value``/``freq`` rows for *ref*, most frequent first."""
    limit = validate_limit(limit)
    column = dialect.quote_identifier(ref.column)
    source = dialect.qualified(ref.schema, ref.table)
    sql = (
        f"SELECT {column} AS value, COUNT(*) AS freq "
        f"FROM {source} GROUP BY {column} ORDER BY freq DESC"
    )
    return sql + dialect.limit_clause(limit)


class DistinctSampler:
    """Samples distinct values for a list of column references."""

    def __init__(self, adapter: DatabaseAdapter, limit: int | None = DEFAULT_DISTINCT_LIMIT):
        self._adapter = adapter
        self._limit = validate_limit(limit)

    @property
    def limit(self) -> int | None:
        return self._limit

    def sample(self, ref: ColumnRef) -> DistinctSample:
        """Distinct values and counts for one column."""
        sql = build_distinct_query(self._adapter.dialect, ref, self._limit)
        with log_step("sampler.column", column=ref.qualified, limit=self._limit) as timer:
            try:
                rows = self._adapter.query(sql)
            except MigrateUtilsError as e:
                e.with_context(column_ref=ref.qualified)
                raise
            timer.add_metric("distinct_values", len(rows))

        values = [DistinctValue(value=row["value"], freq=int(row["freq"])) for row in rows]
        return DistinctSample(column_ref=ref, values=values, limit=self._limit)

    def sample_all(self, refs: Iterable[ColumnRef]) -> list[DistinctSample]:
        """Sample every reference in order; the first failure stops the run."""
        refs = list(refs)
        if not refs:
            logger.info("no columns configured for distinct sampling")
            return []
        return [self.sample(ref) for ref in refs]


__all__ = [
    "DEFAULT_DISTINCT_LIMIT",
    "DistinctSampler",
    "build_distinct_query",
    "validate_limit",
]
