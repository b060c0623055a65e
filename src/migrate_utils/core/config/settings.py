"""
Centralized settings for migrate-utils.

One validated, cached settings object holds the values the original
copy-paste scripts asked the operator to edit at the top of the file
(``@db_name``, ``@distinct_columns``, ``@distinct_limit``,
``\\set schema_name``), plus connection and logging options.

All fields can be set via ``MIGRATE_UTILS_*`` environment variables or a
``.env`` file in the working directory::

    MIGRATE_UTILS_DATABASE_URL=postgresql://me@localhost/crm
    MIGRATE_UTILS_SCHEMA_NAME=public
    MIGRATE_UTILS_DISTINCT_COLUMNS=public.orders.status,public.users.role
    MIGRATE_UTILS_DISTINCT_LIMIT=1000

Tags:
    migrate-utils, configuration, settings, pydantic
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from migrate_utils.introspection.refs import split_column_list


class Settings(BaseSettings):
    """migrate-utils configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MIGRATE_UTILS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ─────────────────────────────────────────────────
    database_url: str = Field(default="sqlite:///:memory:")
    schema_name: str | None = Field(
        default=None,
        description="Schema to inspect (default: public / DATABASE() / main)",
    )
    connect_timeout: int = Field(default=10, ge=1)

    # ── Distinct sampling ────────────────────────────────────────
    distinct_columns: Annotated[list[str], NoDecode] = Field(default_factory=list)
    distinct_limit: int = Field(default=1000, ge=0, description="0 = no limit")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    @field_validator("distinct_columns", mode="before")
    @classmethod
    def _split_columns(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_column_list(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"log_level must be DEBUG, INFO, WARNING or ERROR, got {value!r}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        fmt = value.lower()
        if fmt not in {"console", "json"}:
            raise ValueError(f"log_format must be console or json, got {value!r}")
        return fmt

    def safe_dump(self) -> dict[str, Any]:
        """Settings as a dict with the database password masked."""
        from migrate_utils.core.errors import ConfigError

        from .urls import parse_database_url

        data = self.model_dump()
        try:
            data["database_url"] = parse_database_url(self.database_url).to_url()
        except ConfigError:
            data["database_url"] = "<invalid>"
        return data


_settings_cache: dict[str, Settings] = {}


def get_settings(*, _force_reload: bool = False) -> Settings:
    """Load, validate, and cache a :class:`Settings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = Settings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()
