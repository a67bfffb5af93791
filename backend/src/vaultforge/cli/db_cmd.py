"""Database CLI commands - init, upgrade, current."""

import click

from vaultforge.migrations import current_revision, upgrade as run_upgrade
from vaultforge.persistence.schema import create_schema


@click.group()
def db():
    """Database commands."""
    pass


@db.command()
@click.pass_context
def init(ctx: click.Context):
    """Create missing tables directly from the schema (development)."""
    from vaultforge.cli.main import engine_from_context

    create_schema(engine_from_context(ctx))
    click.echo(click.style("Schema created.", fg="green"))


@db.command()
@click.option("--revision", default="head", show_default=True, help="Target revision.")
@click.pass_context
def upgrade(ctx: click.Context, revision: str):
    """Apply migrations up to a revision."""
    url = ctx.obj.sqlalchemy_url
    run_upgrade(url, revision)
    click.echo(f"Database at revision {current_revision(url)}.")


@db.command()
@click.pass_context
def current(ctx: click.Context):
    """Show the current migration revision."""
    click.echo(current_revision(ctx.obj.sqlalchemy_url) or "(unmigrated)")
