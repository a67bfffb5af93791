"""Per-user facade over every VaultForge service.

A Vault wires the mappers and lifecycle services of all object kinds onto
one database engine for one identity, and offers the multi-step workflows
(create, update, tag) that keep an entity and its revision chain in step.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import sqlalchemy as sa

from vaultforge.events.bus import EventBus
from vaultforge.models import (
    Entity,
    Folder,
    FolderRevision,
    Password,
    PasswordRevision,
    PasswordTagRelation,
    Revision,
    Tag,
    TagRevision,
    object_type,
)
from vaultforge.models.base import utc_now
from vaultforge.persistence.mappers import (
    FolderMapper,
    FolderRevisionMapper,
    PasswordMapper,
    PasswordRevisionMapper,
    PasswordTagRelationMapper,
    TagMapper,
    TagRevisionMapper,
)
from vaultforge.services.identity import IdentityProvider
from vaultforge.services.lifecycle import LifecycleService, new_uuid
from vaultforge.services.objects import (
    EntityService,
    FolderService,
    PasswordService,
    RevisionService,
    TagRelationService,
    TagService,
)
from vaultforge.services.persisters import FieldCipher

logger = logging.getLogger(__name__)


class Vault:
    """All services of one identity, sharing one engine and event bus."""

    def __init__(
        self,
        engine: sa.Engine,
        identity: IdentityProvider,
        *,
        event_bus: EventBus | None = None,
        cipher: FieldCipher | None = None,
        log: logging.Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
        uuid_factory: Callable[[], str] = new_uuid,
    ):
        self.engine = engine
        self.identity = identity
        self.event_bus = event_bus or EventBus()
        user_id = identity.user_id
        options: dict[str, Any] = dict(
            event_bus=self.event_bus, log=log, clock=clock, uuid_factory=uuid_factory
        )

        self.passwords = PasswordService(PasswordMapper(engine, user_id), identity, **options)
        self.folders = FolderService(FolderMapper(engine, user_id), identity, **options)
        self.tags = TagService(TagMapper(engine, user_id), identity, **options)
        self.password_revisions = RevisionService(
            PasswordRevision, PasswordRevisionMapper(engine, user_id), identity, cipher, **options
        )
        self.folder_revisions = RevisionService(
            FolderRevision, FolderRevisionMapper(engine, user_id), identity, cipher, **options
        )
        self.tag_revisions = RevisionService(
            TagRevision, TagRevisionMapper(engine, user_id), identity, cipher, **options
        )
        self.tag_relations = TagRelationService(
            PasswordTagRelationMapper(engine, user_id), identity, **options
        )

        self._entities: dict[type, EntityService] = {
            Password: self.passwords,
            Folder: self.folders,
            Tag: self.tags,
        }
        self._revisions: dict[type, RevisionService] = {
            Password: self.password_revisions,
            Folder: self.folder_revisions,
            Tag: self.tag_revisions,
        }

    # ------------------------------------------------------------------
    # Service lookup
    # ------------------------------------------------------------------

    def service_for(self, obj: Any) -> LifecycleService:
        """Return the lifecycle service handling ``obj``'s type.

        Raises:
            KeyError: If no service handles the type
        """
        for service in self.services():
            if type(obj) is service.model_class:
                return service
        raise KeyError(f"No service for {object_type(obj)}")

    def services(self) -> list[LifecycleService]:
        """Every service, logical objects first."""
        return [
            self.passwords,
            self.folders,
            self.tags,
            self.tag_relations,
            self.password_revisions,
            self.folder_revisions,
            self.tag_revisions,
        ]

    def revisions_of(self, entity_class: type[Entity]) -> RevisionService:
        return self._revisions[entity_class]

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    def _create(self, entity_class: type[Entity], payload: dict[str, Any]) -> tuple[Entity, Revision]:
        entities = self._entities[entity_class]
        revisions = self._revisions[entity_class]

        entity = entities.create()
        revision = revisions.create(entity, **payload)
        entities.save(entity)
        revisions.save(revision)
        entities.set_revision(entity, revision)
        return entity, revision

    def create_password(self, **payload: Any) -> tuple[Password, PasswordRevision]:
        """Create a password with its first revision."""
        return self._create(Password, payload)

    def create_folder(self, **payload: Any) -> tuple[Folder, FolderRevision]:
        return self._create(Folder, payload)

    def create_tag(self, **payload: Any) -> tuple[Tag, TagRevision]:
        return self._create(Tag, payload)

    def update(self, entity: Entity, **changes: Any) -> Revision:
        """Record ``changes`` as a new revision and make it current.

        The previous revision stays in the history untouched.
        """
        entities = self._entities[type(entity)]
        revisions = self._revisions[type(entity)]

        current = revisions.find_current(entity)
        revision = revisions.clone(current, changes)
        revisions.save(revision)
        entities.set_revision(entity, revision)
        return revision

    def current_revision(self, entity: Entity) -> Revision:
        return self._revisions[type(entity)].find_current(entity)

    def tag_password(
        self, password: Password, tag: Tag, hidden: bool = False
    ) -> PasswordTagRelation:
        relation = self.tag_relations.create(password, tag, hidden=hidden)
        return self.tag_relations.save(relation)

    def untag_password(self, password: Password, tag: Tag) -> None:
        """Soft-delete the relation between ``password`` and ``tag``.

        Raises:
            NotFound: If the password is not tagged with the tag
        """
        relation = self.tag_relations.find_one(password.uuid, tag.uuid)
        self.tag_relations.delete(relation)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def purge_deleted(self) -> int:
        """Destroy every soft-deleted object of every user.

        Returns:
            Number of objects destroyed by this call (cascades excluded).
            Soft-deleted revisions that a live object still points at are
            skipped so no entity is left without its current revision.
        """
        destroyed = 0
        for service in self.services():
            for obj in service.find_deleted():
                if isinstance(service, RevisionService) and service.is_current(obj):
                    logger.warning(
                        "Skipping %s %s: still the current revision of a live object",
                        service.object_type,
                        obj.uuid,
                    )
                    continue
                service.destroy(obj)
                destroyed += 1
        logger.info("Purged %d deleted object(s)", destroyed)
        return destroyed


def initialize(engine: sa.Engine, event_bus: EventBus | None = None) -> Vault:
    """Populate the process-wide event and hook registries.

    Called once at application startup.

    Returns:
        The system-scoped vault the built-in cascade hooks act through
    """
    from vaultforge.events.registry import register_builtin_events
    from vaultforge.hooks.cascade import register_builtin_hooks
    from vaultforge.services.identity import UserContext

    register_builtin_events()
    system = Vault(engine, UserContext.system(), event_bus=event_bus)
    register_builtin_hooks(system)
    return system
