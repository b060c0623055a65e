"""
Shared pytest fixtures for migrate-utils tests.

This module provides:
- Settings / logging isolation between tests
- A small SQLite database with primary keys, foreign keys and skewed
  value frequencies for end-to-end introspection tests
"""

import sqlite3
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure migrate_utils is importable without an editable install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from migrate_utils.core.adapters.sqlite import SQLiteAdapter
from migrate_utils.core.config import clear_settings_cache
from migrate_utils.observability import reset_logging

SCHEMA_DDL = """
CREATE TABLE customers (
    id    INTEGER PRIMARY KEY,
    email TEXT NOT NULL,
    tier  TEXT DEFAULT 'free'
);
CREATE TABLE orders (
    id          INTEGER PRIMARY KEY,
    customer_id INTEGER NOT NULL REFERENCES customers(id),
    status      TEXT NOT NULL,
    total       REAL
);
CREATE TABLE order_items (
    order_id INTEGER NOT NULL,
    line_no  INTEGER NOT NULL,
    sku      TEXT,
    PRIMARY KEY (order_id, line_no),
    FOREIGN KEY (order_id) REFERENCES orders(id)
);
CREATE VIEW paid_orders AS SELECT * FROM orders WHERE status = 'paid';
"""

SEED_ROWS = """
INSERT INTO customers (id, email, tier) VALUES
    (1, 'ada@example.com', 'free'),
    (2, 'bob@example.com', 'free'),
    (3, 'cy@example.com', 'pro');
INSERT INTO orders (id, customer_id, status, total) VALUES
    (1, 1, 'new', 10.0),
    (2, 1, 'new', 12.5),
    (3, 2, 'new', 7.0),
    (4, 2, 'paid', 99.0),
    (5, 3, 'paid', 5.0),
    (6, 3, 'shipped', NULL);
INSERT INTO order_items (order_id, line_no, sku) VALUES
    (1, 1, 'A-1'),
    (1, 2, 'B-2'),
    (4, 1, 'A-1');
"""


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """No MIGRATE_UTILS_* env vars, no stray .env file, fresh settings and logging."""
    import os

    for key in list(os.environ):
        if key.startswith("MIGRATE_UTILS_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
    reset_logging()


@pytest.fixture
def sqlite_db(tmp_path: Path) -> str:
    """Path to a seeded SQLite database file."""
    path = tmp_path / "legacy.db"
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA_DDL)
        conn.executescript(SEED_ROWS)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture
def sqlite_url(sqlite_db: str) -> str:
    return f"sqlite:///{sqlite_db}"


@pytest.fixture
def sqlite_adapter(sqlite_db: str) -> Iterator[SQLiteAdapter]:
    """Connected read-only adapter on :func:`sqlite_db`."""
    adapter = SQLiteAdapter(sqlite_db)
    adapter.connect()
    yield adapter
    adapter.disconnect()
