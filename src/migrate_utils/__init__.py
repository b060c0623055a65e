"""
migrate-utils: read-only schema introspection for database migrations.

Reports the structure of an existing PostgreSQL, MySQL/MariaDB or SQLite
schema (tables, columns, keys, enums) and the distinct values of selected
columns, either by connecting directly or by rendering SQL scripts to
paste into a client.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
