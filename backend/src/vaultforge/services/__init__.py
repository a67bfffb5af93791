"""Service layer - lifecycle orchestration per object kind."""

from vaultforge.services.identity import IdentityProvider, UserContext
from vaultforge.services.lifecycle import LifecycleService, ObjectStore, Persister, new_uuid
from vaultforge.services.objects import (
    EntityService,
    FolderService,
    PasswordService,
    RevisionService,
    TagRelationService,
    TagService,
)
from vaultforge.services.persisters import (
    FieldCipher,
    ModelPersister,
    RevisionPersister,
    password_hash,
)

__all__ = [
    "EntityService",
    "FieldCipher",
    "FolderService",
    "IdentityProvider",
    "LifecycleService",
    "ModelPersister",
    "ObjectStore",
    "PasswordService",
    "Persister",
    "RevisionPersister",
    "RevisionService",
    "TagRelationService",
    "TagService",
    "UserContext",
    "new_uuid",
    "password_hash",
]
