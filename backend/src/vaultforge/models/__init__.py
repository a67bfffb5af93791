"""VaultForge object types."""

from vaultforge.models.base import IDENTITY_FIELDS, field_names, object_type
from vaultforge.models.entities import Entity, Folder, Password, Tag
from vaultforge.models.relations import PasswordTagRelation
from vaultforge.models.revisions import (
    FolderRevision,
    PasswordRevision,
    Revision,
    TagRevision,
)

__all__ = [
    "IDENTITY_FIELDS",
    "Entity",
    "Folder",
    "FolderRevision",
    "Password",
    "PasswordRevision",
    "PasswordTagRelation",
    "Revision",
    "Tag",
    "TagRevision",
    "field_names",
    "object_type",
]
