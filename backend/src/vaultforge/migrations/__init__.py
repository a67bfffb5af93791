"""Alembic migration runner.

Wraps Alembic's programmatic API to apply, rollback, and inspect
migrations without requiring a static alembic.ini file. The migration
scripts ship inside this package.
"""

from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent


def make_alembic_config(database_url: str) -> Config:
    """Create an Alembic Config object programmatically."""
    cfg = Config()
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    return cfg


def upgrade(database_url: str, revision: str = "head") -> None:
    """Apply migrations up to ``revision``."""
    logger.info("Upgrading %s to %s", database_url, revision)
    command.upgrade(make_alembic_config(database_url), revision)


def downgrade(database_url: str, revision: str = "base") -> None:
    logger.info("Downgrading %s to %s", database_url, revision)
    command.downgrade(make_alembic_config(database_url), revision)


def current_revision(database_url: str) -> str | None:
    """Return the revision the database is at, or None if unmigrated."""
    engine = create_engine(database_url)
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()
