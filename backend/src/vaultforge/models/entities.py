"""Logical objects.

An entity carries a stable identity and a pointer to its current revision.
Everything a user edits lives on the revision; the entity row only changes
when it is pointed at a newer revision or soft-deleted.
"""

from dataclasses import dataclass


@dataclass
class Entity:
    """Base shape shared by every logical object.

    Attributes:
        id: Storage-internal row id, assigned on insert
        uuid: Stable external identity
        user_id: Owning user
        revision: uuid of the current revision ("" until the first one is set)
        deleted: Soft-delete flag
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 last-change timestamp
    """

    id: int | None = None
    uuid: str = ""
    user_id: str = ""
    revision: str = ""
    deleted: bool = False
    created_at: str | None = None
    updated_at: str | None = None

    def is_deleted(self) -> bool:
        return bool(self.deleted)


@dataclass
class Password(Entity):
    pass


@dataclass
class Folder(Entity):
    pass


@dataclass
class Tag(Entity):
    pass
