"""
Configuration for migrate-utils.

Modules
-------
settings        ``Settings`` (pydantic-settings) + cached ``get_settings()``
urls            ``parse_database_url()`` -> ``DatabaseConfig``
"""

from .settings import Settings, clear_settings_cache, get_settings
from .urls import parse_database_url

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "parse_database_url",
]
