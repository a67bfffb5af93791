"""Built-in cascade hooks.

Soft-deleting a password or tag soft-deletes the tag relations that
reference it. Destroying a password, folder or tag destroys its revision
history and, for passwords and tags, every relation referencing it.

Cascades run through a system-scoped Vault so the cascaded objects'
own hooks and events fire as well.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from vaultforge.hooks.registry import HookRegistry
from vaultforge.models import Entity, Password, Tag

if TYPE_CHECKING:
    from vaultforge.vault import Vault

logger = logging.getLogger(__name__)


class CascadeHooks:
    """Hook listeners keeping revisions and relations in step with entities.

    Only one instance is registered at a time; registering another replaces
    the previous one.
    """

    _active: CascadeHooks | None = None

    def __init__(self, vault: Vault):
        self.vault = vault

    def _bindings(self) -> list[tuple[str, str, Callable[..., None]]]:
        return [
            ("Password", "postDelete", self.delete_password_relations),
            ("Tag", "postDelete", self.delete_tag_relations),
            ("Password", "postDestroy", self.destroy_password),
            ("Folder", "postDestroy", self.destroy_revisions),
            ("Tag", "postDestroy", self.destroy_tag),
        ]

    def register(self) -> None:
        active = CascadeHooks._active
        if active is not None:
            active.unregister()
        for object_type, phase, listener in self._bindings():
            HookRegistry.register(object_type, phase, listener)
        CascadeHooks._active = self

    def unregister(self) -> None:
        for object_type, phase, listener in self._bindings():
            HookRegistry.unregister(object_type, phase, listener)
        if CascadeHooks._active is self:
            CascadeHooks._active = None

    def delete_password_relations(self, password: Password) -> None:
        relations = self.vault.tag_relations
        for relation in relations.find_by_password(password.uuid):
            relations.delete(relation)

    def delete_tag_relations(self, tag: Tag) -> None:
        relations = self.vault.tag_relations
        for relation in relations.find_by_tag(tag.uuid):
            relations.delete(relation)

    def destroy_revisions(self, entity: Entity) -> None:
        revisions = self.vault.revisions_of(type(entity))
        history = revisions.find_by_model(entity.uuid)
        for revision in history:
            revisions.destroy(revision)
        logger.debug(
            "Destroyed %d revision(s) of %s %s", len(history), type(entity).__name__, entity.uuid
        )

    def destroy_password(self, password: Password) -> None:
        self.destroy_revisions(password)
        relations = self.vault.tag_relations
        for relation in relations.find_by_password(password.uuid, include_deleted=True):
            relations.destroy(relation)

    def destroy_tag(self, tag: Tag) -> None:
        self.destroy_revisions(tag)
        relations = self.vault.tag_relations
        for relation in relations.find_by_tag(tag.uuid, include_deleted=True):
            relations.destroy(relation)


def register_builtin_hooks(vault: Vault) -> CascadeHooks:
    """Register framework-provided hooks against a system-scoped vault.

    Called at application startup.
    """
    cascade = CascadeHooks(vault)
    cascade.register()
    return cascade
