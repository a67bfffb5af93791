"""Database configuration and engine factory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.pool import StaticPool


@dataclass
class DatabaseConfig:
    """Database connection configuration.

    Supports sqlite:/// and postgresql:// URL schemes.
    """

    url: str
    echo: bool = False

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> DatabaseConfig:
        """Create config from environment variables.

        Resolution order:
        1. DATABASE_URL env var (standard)
        2. VAULTFORGE_DB_PATH env var (converted to sqlite:/// URL)
        3. Default: sqlite:///{base_path}/data/vaultforge.db
        4. Default: sqlite:///vaultforge.db
        """
        echo = os.environ.get("VAULTFORGE_SQL_ECHO", "").lower() in ("1", "true", "yes")

        url = os.environ.get("DATABASE_URL")
        if url:
            return cls(url=url, echo=echo)

        db_path = os.environ.get("VAULTFORGE_DB_PATH")
        if db_path:
            return cls(url=f"sqlite:///{db_path}", echo=echo)

        if base_path:
            return cls(url=f"sqlite:///{base_path / 'data' / 'vaultforge.db'}", echo=echo)

        return cls(url="sqlite:///vaultforge.db", echo=echo)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def is_postgresql(self) -> bool:
        return self.url.startswith("postgresql")

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and self.url in ("sqlite://", "sqlite:///", "sqlite:///:memory:")

    @property
    def sqlalchemy_url(self) -> str:
        """URL suitable for SQLAlchemy engine creation.

        Ensures postgresql:// URLs use the psycopg (v3) driver since
        the project depends on psycopg[binary], not psycopg2.
        """
        if self.url.startswith("postgresql://"):
            return self.url.replace("postgresql://", "postgresql+psycopg://", 1)
        if self.is_memory:
            return "sqlite://"
        return self.url


def create_engine_from_config(config: DatabaseConfig) -> Engine:
    """Create a SQLAlchemy engine for the configured database.

    In-memory SQLite shares a single connection so every store sees the
    same database.

    Raises:
        ValueError: For unsupported URL schemes.
    """
    if config.is_memory:
        return create_engine(
            config.sqlalchemy_url,
            echo=config.echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if config.is_sqlite or config.is_postgresql:
        return create_engine(config.sqlalchemy_url, echo=config.echo)

    raise ValueError(f"Unsupported database URL scheme: {config.url}")
