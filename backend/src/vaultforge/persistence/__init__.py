"""Persistence layer - database configuration, schema and mappers."""

from vaultforge.persistence.config import DatabaseConfig, create_engine_from_config
from vaultforge.persistence.mapper import ObjectMapper
from vaultforge.persistence.mappers import (
    EntityMapper,
    FolderMapper,
    FolderRevisionMapper,
    PasswordMapper,
    PasswordRevisionMapper,
    PasswordTagRelationMapper,
    RevisionMapper,
    TagMapper,
    TagRevisionMapper,
)
from vaultforge.persistence.schema import create_schema, metadata

__all__ = [
    "DatabaseConfig",
    "EntityMapper",
    "FolderMapper",
    "FolderRevisionMapper",
    "ObjectMapper",
    "PasswordMapper",
    "PasswordRevisionMapper",
    "PasswordTagRelationMapper",
    "RevisionMapper",
    "TagMapper",
    "TagRevisionMapper",
    "create_engine_from_config",
    "create_schema",
    "metadata",
]
