"""
Timing utilities for performance logging.

- Context manager: ``with log_step("catalog.columns") as timer:``
- Manual: ``timer.add_metric("rows", n)`` inside the block

Logs start at DEBUG, end at INFO with ``duration_ms``; failures are logged
at ERROR with the error type and re-raised unchanged.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from migrate_utils.observability.logging import get_logger


@dataclass
class TimingResult:
    """Result of a timed block."""

    step: str
    started_at: float = field(default_factory=time.perf_counter)
    ended_at: float | None = None
    metrics: dict[str, Any] = field(default_factory=dict)

    def stop(self) -> TimingResult:
        """Record end time."""
        self.ended_at = time.perf_counter()
        return self

    @property
    def duration_ms(self) -> float:
        """Duration in milliseconds."""
        end = self.ended_at if self.ended_at is not None else time.perf_counter()
        return (end - self.started_at) * 1000

    def add_metric(self, key: str, value: Any) -> TimingResult:
        """Add a metric to include in the log output."""
        self.metrics[key] = value
        return self

    def to_log_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"duration_ms": round(self.duration_ms, 2)}
        result.update(self.metrics)
        return result


@contextmanager
def log_step(event: str, level: str = "info", **extra_metrics: Any) -> Iterator[TimingResult]:
    """
    Context manager that logs step start/end with timing.

    Usage:
        with log_step("sampler.column", column="public.orders.status") as timer:
            rows = adapter.query(sql)
            timer.add_metric("distinct_values", len(rows))

        # DEBUG sampler.column.start column=public.orders.status
        # INFO  sampler.column.end   column=public.orders.status duration_ms=4.2 distinct_values=5
    """
    log = get_logger("migrate_utils.timing")
    timer = TimingResult(step=event, metrics=dict(extra_metrics))
    log.debug(f"{event}.start", **extra_metrics)

    try:
        yield timer
    except Exception as e:
        timer.stop()
        log.error(
            f"{event}.failed",
            error_type=type(e).__name__,
            error_message=str(e),
            **timer.to_log_dict(),
        )
        raise

    timer.stop()
    getattr(log, level)(f"{event}.end", **timer.to_log_dict())


__all__ = [
    "TimingResult",
    "log_step",
]
