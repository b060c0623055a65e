"""
migrate-utils CLI (typer + rich).

Usage::

    migrate-utils overview --url postgresql://me@localhost/crm --schema public
    migrate-utils distincts orders.status users.role --limit 50
    migrate-utils dump -c public.orders.status --format markdown -o crm.md
    migrate-utils script postgres --schema public -c public.orders.status
"""

from migrate_utils.cli.app import app

__all__ = ["app"]
