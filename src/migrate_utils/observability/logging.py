"""
Logging configuration.

Provides a single entry point for configuring structured logging with
structlog.  Logs always go to **stderr** so that report output written to
stdout can be piped or redirected untouched.

Configuration is read from arguments or environment variables:
- MIGRATE_UTILS_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- MIGRATE_UTILS_LOG_FORMAT: json | console (default: console)

Usage:
    from migrate_utils.observability.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    log = get_logger(__name__)
    log.info("overview.loaded", tables=12)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Literal

import structlog
from structlog.types import Processor

# Track if logging has been configured
_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | str | None = None,
    format: Literal["json", "console"] | str | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at startup (CLI entry).  Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Log level (overrides MIGRATE_UTILS_LOG_LEVEL env var)
        format: Output format (overrides MIGRATE_UTILS_LOG_FORMAT env var)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("MIGRATE_UTILS_LOG_LEVEL", "WARNING")).upper()
    log_format = (format or os.environ.get("MIGRATE_UTILS_LOG_FORMAT", "console")).lower()
    level_num = getattr(logging, log_level, logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level_num,
        force=True,
    )
    logging.getLogger("migrate_utils").setLevel(level_num)

    _configured = True


def ensure_logging() -> None:
    """Apply the default configuration unless structlog is already set up.

    Library entry points call this so that SDK use without
    :func:`configure_logging` still logs to stderr at WARNING rather than
    printing debug lines to stdout.  An application that configured
    structlog itself is left alone.
    """
    if not _configured and not structlog.is_configured():
        configure_logging()


def get_logger(name: str | None = None) -> Any:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured


def reset_logging() -> None:
    """Forget the current configuration (primarily for testing)."""
    global _configured
    structlog.reset_defaults()
    _configured = False


__all__ = [
    "configure_logging",
    "ensure_logging",
    "get_logger",
    "is_configured",
    "reset_logging",
]
