"""Tasklist CLI — run the server and manage its database.

Usage:
    tasklist serve                     # Run the API with uvicorn
    tasklist serve --port 9000 --reload
    tasklist init-db                   # Create missing tables (dev only; use alembic in prod)
    tasklist gen-secret                # Print a value for TASKLIST_JWT_SECRET

Configuration comes from TASKLIST_* env vars (or .env), same as the app.
"""

from __future__ import annotations

import asyncio
import secrets
import sys
from typing import Optional

import click
from pydantic import ValidationError

from tasklist import __version__
from tasklist.config import Settings


def _load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        click.echo(f"Invalid configuration:\n{e}", err=True)
        sys.exit(2)


@click.group()
@click.version_option(__version__, prog_name="tasklist")
def cli():
    """Tasklist — multi-user task list API."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: TASKLIST_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: TASKLIST_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP server."""
    import uvicorn

    settings = _load_settings()
    uvicorn.run(
        "tasklist.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,  # structlog owns logging
    )


@cli.command("init-db")
def init_db():
    """Create any missing tables in the configured database."""
    from tasklist.db.engine import build_engine, create_tables

    settings = _load_settings()

    async def _init():
        engine = build_engine(settings)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    click.echo("Tables created.")


@cli.command("gen-secret")
@click.option("--bytes", "nbytes", default=32, show_default=True, type=click.IntRange(min=32))
def gen_secret(nbytes: int):
    """Print a random signing secret."""
    click.echo(secrets.token_urlsafe(nbytes))


def main():
    cli()


if __name__ == "__main__":
    main()
