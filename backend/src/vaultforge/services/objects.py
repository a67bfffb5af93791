"""Lifecycle services for each object kind.

Each service is the generic LifecycleService instantiated for one model
class, plus the creation and lookup helpers that kind needs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from vaultforge.errors import InvalidObject
from vaultforge.events.bus import EventBus
from vaultforge.models import (
    IDENTITY_FIELDS,
    Entity,
    Folder,
    Password,
    PasswordTagRelation,
    Revision,
    Tag,
    field_names,
)
from vaultforge.models.base import utc_now
from vaultforge.persistence.mappers import (
    EntityMapper,
    FolderMapper,
    PasswordMapper,
    PasswordTagRelationMapper,
    RevisionMapper,
    TagMapper,
)
from vaultforge.services.identity import IdentityProvider
from vaultforge.services.lifecycle import LifecycleService, ObjectStore, Persister, new_uuid
from vaultforge.services.persisters import FieldCipher, ModelPersister, RevisionPersister

ModelT = TypeVar("ModelT")
EntityT = TypeVar("EntityT", bound=Entity)
RevisionT = TypeVar("RevisionT", bound=Revision)


class _OwnedObjectService(LifecycleService[ModelT]):
    """Shared construction for services that act for one identity."""

    def __init__(
        self,
        model_class: type[ModelT],
        mapper: ObjectStore[ModelT],
        persister: Persister[ModelT],
        identity: IdentityProvider,
        *,
        event_bus: EventBus | None = None,
        log: logging.Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
        uuid_factory: Callable[[], str] = new_uuid,
    ):
        super().__init__(
            model_class,
            persister,
            mapper,
            event_bus=event_bus,
            log=log,
            clock=clock,
            uuid_factory=uuid_factory,
        )
        self.mapper = mapper
        self.user_id = identity.user_id

    def _require_user(self) -> str:
        if self.user_id is None:
            raise InvalidObject(f"Cannot create a {self.object_type} without a user")
        return self.user_id

    def find_all(self) -> list[ModelT]:
        """All objects of the calling user, soft-deleted included."""
        return self.mapper.find_all()


class EntityService(_OwnedObjectService):
    """Lifecycle of logical objects (passwords, folders, tags)."""

    def __init__(self, model_class: type[EntityT], mapper: EntityMapper, identity, **kwargs):
        clock = kwargs.get("clock", utc_now)
        super().__init__(model_class, mapper, ModelPersister(mapper, clock), identity, **kwargs)

    def create(self) -> EntityT:
        """Return a new, unsaved object owned by the calling user.

        The revision pointer stays empty until set_revision is called.
        """
        now = self._now()
        return self.model_class(
            uuid=self.uuid_factory(),
            user_id=self._require_user(),
            revision="",
            deleted=False,
            created_at=now,
            updated_at=now,
        )

    def set_revision(self, entity: EntityT, revision: Revision) -> EntityT:
        """Point ``entity`` at ``revision`` and save it.

        Raises:
            TypeMismatch: If ``entity`` is not of this service's type
            InvalidObject: If the revision belongs to another object or
                user, or is soft-deleted
        """
        self._check_type(entity)
        if revision.model != entity.uuid:
            raise InvalidObject(
                f"Revision {revision.uuid} does not belong to {self.object_type} {entity.uuid}"
            )
        if revision.user_id != entity.user_id:
            raise InvalidObject(f"Revision {revision.uuid} belongs to another user")
        if revision.is_deleted():
            raise InvalidObject(f"Revision {revision.uuid} is deleted")

        entity.revision = revision.uuid
        return self.save(entity)


class PasswordService(EntityService):
    def __init__(self, mapper: PasswordMapper, identity: IdentityProvider, **kwargs):
        super().__init__(Password, mapper, identity, **kwargs)

    def get_by_folder(self, folder_uuid: str | None) -> list[Password]:
        return self.mapper.get_by_folder(folder_uuid)

    def get_by_tag(self, tag_uuid: str, include_hidden: bool = False) -> list[Password]:
        return self.mapper.get_by_tag(tag_uuid, include_hidden)


class FolderService(EntityService):
    def __init__(self, mapper: FolderMapper, identity: IdentityProvider, **kwargs):
        super().__init__(Folder, mapper, identity, **kwargs)

    def get_by_parent(self, parent_uuid: str | None) -> list[Folder]:
        return self.mapper.get_by_parent(parent_uuid)


class TagService(EntityService):
    def __init__(self, mapper: TagMapper, identity: IdentityProvider, **kwargs):
        super().__init__(Tag, mapper, identity, **kwargs)

    def get_by_password(self, password_uuid: str, include_hidden: bool = False) -> list[Tag]:
        return self.mapper.get_by_password(password_uuid, include_hidden)


class RevisionService(_OwnedObjectService):
    """Lifecycle of revisions of one kind.

    Reads are decrypted when a cipher is configured.
    """

    def __init__(
        self,
        model_class: type[RevisionT],
        mapper: RevisionMapper,
        identity: IdentityProvider,
        cipher: FieldCipher | None = None,
        **kwargs,
    ):
        clock = kwargs.get("clock", utc_now)
        persister = RevisionPersister(mapper, cipher=cipher, clock=clock)
        super().__init__(model_class, mapper, persister, identity, **kwargs)
        self.cipher = cipher

    def create(self, model: Entity | str, **payload: Any) -> RevisionT:
        """Return a new, unsaved revision of ``model`` owned by the caller.

        Raises:
            InvalidObject: If ``payload`` names an unknown or identity field
        """
        allowed = set(field_names(self.model_class)) - set(IDENTITY_FIELDS)
        unknown = set(payload) - allowed
        if unknown:
            raise InvalidObject(
                f"Unknown {self.object_type} field(s): {', '.join(sorted(unknown))}"
            )

        now = self._now()
        values = dict(payload)
        values.update(
            uuid=self.uuid_factory(),
            model=model.uuid if isinstance(model, Entity) else model,
            user_id=self._require_user(),
            deleted=False,
            created_at=now,
            updated_at=now,
        )
        return self.model_class(**values)

    def is_current(self, revision: RevisionT) -> bool:
        return self.mapper.is_current(revision)

    def _check_not_current(self, revision: RevisionT) -> None:
        if self.mapper.is_current(revision):
            raise InvalidObject(
                f"Revision {revision.uuid} is the current revision of a live object"
            )

    def delete(self, revision: RevisionT) -> None:
        """Soft-delete a revision that no live object points at.

        Raises:
            TypeMismatch: If ``revision`` is not of this service's type
            InvalidObject: If a live object still uses it as its current
                revision; nothing fires in that case
        """
        self._check_type(revision)
        self._check_not_current(revision)
        super().delete(revision)

    def destroy(self, revision: RevisionT) -> None:
        self._check_type(revision)
        self._check_not_current(revision)
        super().destroy(revision)

    def _decrypted(self, revision: RevisionT) -> RevisionT:
        return self.cipher.decrypt(revision) if self.cipher else revision

    def find_by_uuid(self, uuid: str) -> RevisionT:
        return self._decrypted(super().find_by_uuid(uuid))

    def find_by_model(self, model_uuid: str) -> list[RevisionT]:
        return [self._decrypted(r) for r in self.mapper.find_all_by_model(model_uuid)]

    def find_current(self, entity: Entity) -> RevisionT:
        return self._decrypted(self.mapper.find_current(entity))


class TagRelationService(_OwnedObjectService):
    """Lifecycle of password <-> tag links."""

    def __init__(self, mapper: PasswordTagRelationMapper, identity: IdentityProvider, **kwargs):
        clock = kwargs.get("clock", utc_now)
        super().__init__(
            PasswordTagRelation, mapper, ModelPersister(mapper, clock), identity, **kwargs
        )

    def create(
        self,
        password: Password,
        tag: Tag,
        hidden: bool = False,
        client: str = "",
    ) -> PasswordTagRelation:
        """Return a new, unsaved relation between ``password`` and ``tag``.

        Raises:
            InvalidObject: If either side belongs to another user
        """
        user_id = self._require_user()
        if password.user_id != user_id or tag.user_id != user_id:
            raise InvalidObject("Can not link objects of another user")

        now = self._now()
        return PasswordTagRelation(
            uuid=self.uuid_factory(),
            password=password.uuid,
            tag=tag.uuid,
            user_id=user_id,
            hidden=hidden,
            client=client,
            deleted=False,
            created_at=now,
            updated_at=now,
        )

    def find_by_password(
        self, password_uuid: str, include_deleted: bool = False
    ) -> list[PasswordTagRelation]:
        return self.mapper.find_all_by_password(password_uuid, include_deleted)

    def find_by_tag(
        self, tag_uuid: str, include_deleted: bool = False
    ) -> list[PasswordTagRelation]:
        return self.mapper.find_all_by_tag(tag_uuid, include_deleted)

    def find_one(self, password_uuid: str, tag_uuid: str) -> PasswordTagRelation:
        return self.mapper.find_one_by_password_and_tag(password_uuid, tag_uuid)
