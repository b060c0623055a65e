"""
Observability: structlog configuration and step timing.

Usage:
    from migrate_utils.observability import configure_logging, get_logger, log_step

    configure_logging(level="INFO", format="json")
    log = get_logger(__name__)

    with log_step("catalog.overview", schema="public") as timer:
        overview = inspector.overview()
        timer.add_metric("tables", len(overview.tables))
"""

from migrate_utils.observability.logging import (
    configure_logging,
    ensure_logging,
    get_logger,
    is_configured,
    reset_logging,
)
from migrate_utils.observability.timing import TimingResult, log_step

__all__ = [
    "configure_logging",
    "ensure_logging",
    "get_logger",
    "is_configured",
    "reset_logging",
    "TimingResult",
    "log_step",
]
