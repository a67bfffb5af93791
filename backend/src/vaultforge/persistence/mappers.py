"""Concrete mappers for entities, revisions and tag relations."""

from __future__ import annotations

from typing import ClassVar, TypeVar

import sqlalchemy as sa

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
)
from vaultforge.persistence import schema
from vaultforge.persistence.mapper import ObjectMapper

EntityT = TypeVar("EntityT", bound=Entity)
RevisionT = TypeVar("RevisionT", bound=Revision)


class EntityMapper(ObjectMapper[EntityT]):
    """Mapper for logical objects.

    Current-state queries join through the entity's ``revision`` pointer
    rather than reading denormalized columns, so revision history stays
    queryable after the current revision changes.
    """

    revision_table: ClassVar[sa.Table]

    def _owner_conditions(self, other: sa.Table) -> list[sa.ColumnElement[bool]]:
        """Owner predicates applied to the entity table and a joined table.

        Both sides are checked on their own so a stale pointer to another
        user's row never leaks through the join.
        """
        if self.user_id is None:
            return [other.c.user_id == self.table.c.user_id]
        return [
            self.table.c.user_id == self.user_id,
            other.c.user_id == self.user_id,
        ]

    def _by_current_revision(self, *conditions: sa.ColumnElement[bool]) -> list[EntityT]:
        """Live entities whose live current revision matches ``conditions``."""
        entity, revision = self.table, self.revision_table
        stmt = (
            sa.select(entity)
            .join(revision, entity.c.revision == revision.c.uuid)
            .where(
                entity.c.deleted.is_(False),
                revision.c.deleted.is_(False),
                *self._owner_conditions(revision),
                *conditions,
            )
            .order_by(entity.c.id)
        )
        return self._fetch_all(stmt)

    def _by_relation(
        self,
        own_column: str,
        other_column: str,
        other_uuid: str,
        include_hidden: bool,
    ) -> list[EntityT]:
        """Live entities linked to ``other_uuid`` through a live tag relation.

        Hidden relations are excluded in the join condition itself.
        """
        entity, relation = self.table, schema.password_tag_relations
        on_clause = sa.and_(
            entity.c.uuid == relation.c[own_column],
            relation.c[other_column] == other_uuid,
            relation.c.deleted.is_(False),
        )
        if not include_hidden:
            on_clause = sa.and_(on_clause, relation.c.hidden.is_(False))

        stmt = (
            sa.select(entity)
            .join(relation, on_clause)
            .where(entity.c.deleted.is_(False), *self._owner_conditions(relation))
            .order_by(entity.c.id)
        )
        return self._fetch_all(stmt)


class PasswordMapper(EntityMapper[Password]):
    table = schema.passwords
    model_class = Password
    revision_table = schema.password_revisions

    def get_by_folder(self, parent_uuid: str | None) -> list[Password]:
        """Live passwords whose current revision lives in the given folder.

        ``None`` selects the root folder.
        """
        folder = self.revision_table.c.folder
        if parent_uuid is None:
            return self._by_current_revision(folder.is_(None))
        return self._by_current_revision(folder == parent_uuid)

    def get_by_tag(self, tag_uuid: str, include_hidden: bool = False) -> list[Password]:
        return self._by_relation("password", "tag", tag_uuid, include_hidden)


class FolderMapper(EntityMapper[Folder]):
    table = schema.folders
    model_class = Folder
    revision_table = schema.folder_revisions

    def get_by_parent(self, parent_uuid: str | None) -> list[Folder]:
        parent = self.revision_table.c.parent
        if parent_uuid is None:
            return self._by_current_revision(parent.is_(None))
        return self._by_current_revision(parent == parent_uuid)


class TagMapper(EntityMapper[Tag]):
    table = schema.tags
    model_class = Tag
    revision_table = schema.tag_revisions

    def get_by_password(self, password_uuid: str, include_hidden: bool = False) -> list[Tag]:
        return self._by_relation("tag", "password", password_uuid, include_hidden)


class RevisionMapper(ObjectMapper[RevisionT]):
    """Mapper for append-only revision rows."""

    entity_table: ClassVar[sa.Table]

    def find_all_by_model(self, model_uuid: str) -> list[RevisionT]:
        """Full history of an entity, oldest first, soft-deleted included."""
        stmt = (
            self._scoped(sa.select(self.table))
            .where(self.table.c.model == model_uuid)
            .order_by(self.table.c.id)
        )
        return self._fetch_all(stmt)

    def find_current(self, entity: Entity) -> RevisionT:
        return self.find_by_uuid(entity.revision)

    def is_current(self, revision: Revision) -> bool:
        """Whether a live entity of any user points at ``revision``."""
        entity = self.entity_table
        stmt = (
            sa.select(entity.c.id)
            .where(entity.c.revision == revision.uuid, entity.c.deleted.is_(False))
            .limit(1)
        )
        with self._guard(), self._engine.connect() as conn:
            return conn.execute(stmt).first() is not None


class PasswordRevisionMapper(RevisionMapper[PasswordRevision]):
    table = schema.password_revisions
    model_class = PasswordRevision
    entity_table = schema.passwords


class FolderRevisionMapper(RevisionMapper[FolderRevision]):
    table = schema.folder_revisions
    model_class = FolderRevision
    entity_table = schema.folders


class TagRevisionMapper(RevisionMapper[TagRevision]):
    table = schema.tag_revisions
    model_class = TagRevision
    entity_table = schema.tags


class PasswordTagRelationMapper(ObjectMapper[PasswordTagRelation]):
    table = schema.password_tag_relations
    model_class = PasswordTagRelation

    def _relations(self, include_deleted: bool = False) -> sa.Select:
        stmt = self._scoped(sa.select(self.table))
        if include_deleted:
            return stmt
        return stmt.where(self.table.c.deleted.is_(False))

    def find_all_by_password(
        self, password_uuid: str, include_deleted: bool = False
    ) -> list[PasswordTagRelation]:
        """Relations of a password, hidden ones included."""
        stmt = self._relations(include_deleted).where(self.table.c.password == password_uuid)
        return self._fetch_all(stmt.order_by(self.table.c.id))

    def find_all_by_tag(
        self, tag_uuid: str, include_deleted: bool = False
    ) -> list[PasswordTagRelation]:
        stmt = self._relations(include_deleted).where(self.table.c.tag == tag_uuid)
        return self._fetch_all(stmt.order_by(self.table.c.id))

    def find_one_by_password_and_tag(
        self, password_uuid: str, tag_uuid: str
    ) -> PasswordTagRelation:
        stmt = self._relations().where(
            self.table.c.password == password_uuid,
            self.table.c.tag == tag_uuid,
        )
        return self._fetch_one(stmt, f"password {password_uuid} and tag {tag_uuid}")
