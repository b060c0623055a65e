"""
Root Typer application for the migrate-utils CLI.

Report output goes to stdout; logs, warnings and errors go to stderr so
reports can be redirected to a file untouched.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="migrate-utils",
    help="migrate-utils: read-only schema introspection for database migrations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        from migrate_utils import __version__

        try:
            v = pkg_version("migrate-utils")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"migrate-utils {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING or ERROR (default: MIGRATE_UTILS_LOG_LEVEL)"
    ),
    log_format: str | None = typer.Option(
        None, "--log-format", help="console or json (default: MIGRATE_UTILS_LOG_FORMAT)"
    ),
) -> None:
    """migrate-utils CLI: inspect schemas, sample distinct values, render SQL scripts."""
    from pydantic import ValidationError as SettingsValidationError
    from rich.markup import escape

    from migrate_utils.cli.utils import err_console
    from migrate_utils.core.config import get_settings
    from migrate_utils.observability import configure_logging

    try:
        settings = get_settings()
    except SettingsValidationError as e:
        err_console.print(f"[bold red]Error[/bold red] (CONFIG_ERROR): invalid configuration\n{escape(str(e))}")
        raise typer.Exit(code=1) from e

    configure_logging(
        level=log_level or settings.log_level,
        format=log_format or settings.log_format,
        force=True,
    )


# ── Command registration ─────────────────────────────────────────────────

from migrate_utils.cli.adapters import adapters  # noqa: E402
from migrate_utils.cli.config import app as config_app  # noqa: E402
from migrate_utils.cli.schema import distincts, dump, overview  # noqa: E402
from migrate_utils.cli.script import script  # noqa: E402

app.command("overview")(overview)
app.command("distincts")(distincts)
app.command("dump")(dump)
app.command("script")(script)
app.command("adapters")(adapters)
app.add_typer(config_app, name="config", help="Configuration inspection.")
