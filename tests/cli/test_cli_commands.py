"""Tests for migrate_utils.cli: command smoke tests via CliRunner.

Commands run end-to-end against the SQLite fixture database; no server
database is needed.
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from migrate_utils.cli.app import app

runner = CliRunner()


# ─── Global options ──────────────────────────────────────────────────────


class TestGlobalOptions:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("migrate-utils ")

    def test_debug_json_logs(self, sqlite_url):
        result = runner.invoke(
            app, ["--log-level", "DEBUG", "--log-format", "json", "overview", "--url", sqlite_url, "-f", "text"]
        )
        assert result.exit_code == 0
        assert '"event": "catalog.overview.end"' in result.output

    def test_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("MIGRATE_UTILS_LOG_LEVEL", "LOUD")
        result = runner.invoke(app, ["adapters"])
        assert result.exit_code == 1
        assert "invalid configuration" in result.output


# ─── overview ────────────────────────────────────────────────────────────


class TestOverviewCLI:
    def test_json(self, sqlite_url):
        result = runner.invoke(app, ["overview", "--url", sqlite_url, "--format", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["schema"] == "main"
        assert [t["table_name"] for t in payload["tables"]] == ["customers", "order_items", "orders"]

    def test_table(self, sqlite_url):
        result = runner.invoke(app, ["overview", "--url", sqlite_url])
        assert result.exit_code == 0
        assert "customers" in result.output
        assert "Foreign Keys" in result.output

    def test_text(self, sqlite_url):
        result = runner.invoke(app, ["overview", "-u", sqlite_url, "-f", "text"])
        assert result.exit_code == 0
        assert "=== SCHEMA OVERVIEW ===" in result.output
        assert "PRIMARY KEYS" in result.output

    def test_markdown(self, sqlite_url):
        result = runner.invoke(app, ["overview", "-u", sqlite_url, "-f", "markdown"])
        assert result.exit_code == 0
        assert "## `orders`" in result.output
        assert "FK -> customers.id" in result.output

    def test_url_from_environment(self, monkeypatch, sqlite_url):
        monkeypatch.setenv("MIGRATE_UTILS_DATABASE_URL", sqlite_url)
        result = runner.invoke(app, ["overview", "-f", "json"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)["tables"]) == 3

    def test_empty_database_warns(self):
        result = runner.invoke(app, ["overview", "--url", "sqlite:///:memory:", "-f", "text"])
        assert result.exit_code == 0
        assert "No base tables found" in result.output

    def test_unsupported_url(self):
        result = runner.invoke(app, ["overview", "--url", "oracle://db/x"])
        assert result.exit_code == 1
        assert "CONFIG_ERROR" in result.output

    def test_unreachable_database(self, tmp_path):
        result = runner.invoke(app, ["overview", "--url", f"sqlite:///{tmp_path}/no/such/dir.db"])
        assert result.exit_code == 1
        assert "CONNECTION_FAILED" in result.output


# ─── distincts ───────────────────────────────────────────────────────────


class TestDistinctsCLI:
    def test_json(self, sqlite_url):
        result = runner.invoke(
            app, ["distincts", "orders.status", "customers.tier", "--url", sqlite_url, "-f", "json"]
        )
        assert result.exit_code == 0
        samples = json.loads(result.stdout)["distincts"]
        assert samples[0]["qualified"] == "main.orders.status"
        assert samples[0]["values"][0] == {"value": "new", "freq": 3}
        assert samples[1]["values"][0] == {"value": "free", "freq": 2}

    def test_limit(self, sqlite_url):
        result = runner.invoke(app, ["distincts", "orders.status", "-u", sqlite_url, "-l", "1", "-f", "json"])
        assert result.exit_code == 0
        sample = json.loads(result.stdout)["distincts"][0]
        assert len(sample["values"]) == 1
        assert sample["truncated"] is True

    def test_text(self, sqlite_url):
        result = runner.invoke(app, ["distincts", "orders.status", "-u", sqlite_url, "-f", "text"])
        assert result.exit_code == 0
        assert "--- DISTINCTS: main.orders.status ---" in result.output

    def test_columns_from_environment(self, monkeypatch, sqlite_url):
        monkeypatch.setenv("MIGRATE_UTILS_DISTINCT_COLUMNS", "orders.status,customers.tier")
        result = runner.invoke(app, ["distincts", "-u", sqlite_url, "-f", "json"])
        assert result.exit_code == 0
        assert len(json.loads(result.stdout)["distincts"]) == 2

    def test_no_columns(self, sqlite_url):
        result = runner.invoke(app, ["distincts", "-u", sqlite_url])
        assert result.exit_code == 0
        assert "No columns configured for distinct sampling." in result.output

    def test_bad_reference(self, sqlite_url):
        result = runner.invoke(app, ["distincts", "status", "-u", sqlite_url])
        assert result.exit_code == 1
        assert "VALIDATION_FAILED" in result.output

    def test_missing_table(self, sqlite_url):
        result = runner.invoke(app, ["distincts", "nope.status", "-u", sqlite_url])
        assert result.exit_code == 1
        assert "QUERY_FAILED" in result.output

    def test_negative_limit_rejected(self, sqlite_url):
        result = runner.invoke(app, ["distincts", "orders.status", "-u", sqlite_url, "-l", "-1"])
        assert result.exit_code != 0


# ─── dump ────────────────────────────────────────────────────────────────


class TestDumpCLI:
    def test_text_to_stdout(self, sqlite_url):
        result = runner.invoke(app, ["dump", "-c", "orders.status", "-u", sqlite_url])
        assert result.exit_code == 0
        assert "=== SCHEMA OVERVIEW ===" in result.output
        assert "=== DISTINCT VALUES FOR SELECTED COLUMNS ===" in result.output
        assert "--- DISTINCTS: main.orders.status ---" in result.output

    def test_markdown_to_file(self, sqlite_url, tmp_path):
        out = tmp_path / "schema.md"
        result = runner.invoke(
            app, ["dump", "-c", "orders.status", "-u", sqlite_url, "-f", "markdown", "-o", str(out)]
        )
        assert result.exit_code == 0
        text = out.read_text()
        assert "# Schema `main` (sqlite)" in text
        assert "### `main.orders.status`" in text

    def test_json_to_file(self, sqlite_url, tmp_path):
        out = tmp_path / "schema.json"
        result = runner.invoke(app, ["dump", "-u", sqlite_url, "-f", "json", "-o", str(out)])
        assert result.exit_code == 0
        payload = json.loads(out.read_text())
        assert payload["distincts"] == []
        assert len(payload["tables"]) == 3


# ─── script ──────────────────────────────────────────────────────────────


class TestScriptCLI:
    def test_postgres(self):
        result = runner.invoke(app, ["script", "postgres", "--schema", "sales", "-c", "orders.status"])
        assert result.exit_code == 0
        assert "\\set schema_name 'sales'" in result.output
        assert 'FROM "sales"."orders"' in result.output

    @pytest.mark.parametrize("kind", ["mysql", "postgres", "postgres-gui", "sqlite"])
    def test_every_kind(self, kind):
        result = runner.invoke(app, ["script", kind])
        assert result.exit_code == 0
        assert "TABLES (BASE TABLES)" in result.output

    def test_to_file(self, tmp_path):
        out = tmp_path / "extract.sql"
        result = runner.invoke(app, ["script", "mysql", "-c", "orders.status", "-l", "0", "-o", str(out)])
        assert result.exit_code == 0
        text = out.read_text()
        assert "SET @db_name = DATABASE();" in text
        assert "ORDER BY freq DESC;" in text

    def test_settings_columns_and_limit(self, monkeypatch):
        monkeypatch.setenv("MIGRATE_UTILS_DISTINCT_COLUMNS", '{"public.users.role"}')
        monkeypatch.setenv("MIGRATE_UTILS_DISTINCT_LIMIT", "25")
        result = runner.invoke(app, ["script", "postgres"])
        assert result.exit_code == 0
        assert "--- DISTINCTS: public.users.role ---" in result.output
        assert "LIMIT 25;" in result.output

    def test_bad_reference(self):
        result = runner.invoke(app, ["script", "postgres", "-c", "a.b.c.d"])
        assert result.exit_code == 1
        assert "VALIDATION_FAILED" in result.output

    def test_unknown_kind(self):
        result = runner.invoke(app, ["script", "oracle"])
        assert result.exit_code != 0


# ─── config / adapters ───────────────────────────────────────────────────


class TestConfigCLI:
    def test_show_json_masks_password(self, monkeypatch):
        monkeypatch.setenv("MIGRATE_UTILS_DATABASE_URL", "postgresql://me:s3cret@db/crm")
        result = runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["database_url"] == "postgresql://me:***@db:5432/crm"
        assert payload["distinct_limit"] == 1000

    def test_show_table(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "Settings" in result.output


class TestAdaptersCLI:
    def test_json(self):
        result = runner.invoke(app, ["adapters", "--json"])
        assert result.exit_code == 0
        rows = {row["name"]: row for row in json.loads(result.stdout)}
        assert set(rows) == {"sqlite", "postgresql", "postgres", "mysql", "mariadb"}
        assert rows["sqlite"]["installed"] is True
        assert rows["postgres"]["driver"] == "psycopg2"

    def test_table(self):
        result = runner.invoke(app, ["adapters"])
        assert result.exit_code == 0
        assert "sqlite" in result.output
