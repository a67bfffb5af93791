"""VaultForge CLI entry point."""

import logging
import os

import click

from vaultforge.persistence.config import DatabaseConfig, create_engine_from_config


@click.group()
@click.option(
    "--database-url",
    envvar="DATABASE_URL",
    default=None,
    help="SQLAlchemy database URL (defaults to VAULTFORGE_DB_PATH or ./vaultforge.db).",
)
@click.option(
    "--log-level",
    default=lambda: os.environ.get("VAULTFORGE_LOG_LEVEL", "warning"),
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Logging level.",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str | None, log_level: str):
    """VaultForge - versioned password store CLI."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = DatabaseConfig(url=database_url) if database_url else DatabaseConfig.from_env()
    ctx.obj = config


def engine_from_context(ctx: click.Context):
    return create_engine_from_config(ctx.obj)


# Register subcommand groups
from vaultforge.cli.db_cmd import db  # noqa: E402
from vaultforge.cli.passwords_cmd import passwords  # noqa: E402
from vaultforge.cli.trash_cmd import trash  # noqa: E402

cli.add_command(db)
cli.add_command(passwords)
cli.add_command(trash)
