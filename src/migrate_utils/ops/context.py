"""
Request-scoped context for operations.

Every operation function receives an :class:`OperationContext` as its first
argument.  The context carries the database adapter, the schema to inspect,
caller identity, and arbitrary metadata.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from migrate_utils.core.adapters.base import DatabaseAdapter


@dataclass
class OperationContext:
    """Context passed to every operation function.

    Attributes:
        adapter: Connected :class:`DatabaseAdapter` to read from.
        schema: Schema to inspect.  ``None`` means the dialect default
            (``public``, ``main``) or the current database on MySQL.
        request_id: Unique ID for this operation invocation (auto-generated).
        caller: Origin of the request: ``"cli"`` or ``"sdk"``.
        metadata: Arbitrary key/value pairs forwarded to logging.
    """

    adapter: DatabaseAdapter
    schema: str | None = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    caller: str = "sdk"
    metadata: dict[str, Any] = field(default_factory=dict)
