"""Immutable revisions of logical objects.

A revision never changes its ``uuid`` or ``model``. Editing an object means
cloning its current revision with overwrites and pointing the entity at the
clone.
"""

from dataclasses import dataclass


@dataclass
class Revision:
    """Base shape shared by every revision kind.

    Attributes:
        id: Storage-internal row id, assigned on insert
        uuid: Stable identity of this revision
        model: uuid of the entity this revision belongs to
        user_id: Owning user
        label: Display label
        cse_type: Client-side encryption scheme of the payload
        sse_type: Server-side encryption scheme of the payload
        client: Name of the client that produced the revision
        edited: ISO-8601 timestamp of the last user-visible edit
        deleted: Soft-delete flag
    """

    id: int | None = None
    uuid: str = ""
    model: str = ""
    user_id: str = ""
    label: str = ""
    favorite: bool = False
    hidden: bool = False
    trashed: bool = False
    cse_type: str = "none"
    sse_type: str = "none"
    client: str = ""
    edited: str | None = None
    deleted: bool = False
    created_at: str | None = None
    updated_at: str | None = None

    def is_deleted(self) -> bool:
        return bool(self.deleted)


@dataclass
class PasswordRevision(Revision):
    """Revision of a password.

    ``folder`` is the uuid of the folder the password lives in while this
    revision is current; None means the root folder.
    """

    folder: str | None = None
    username: str = ""
    password: str = ""
    url: str = ""
    notes: str = ""
    custom_fields: str = "[]"
    hash: str = ""
    status: int = 0


@dataclass
class FolderRevision(Revision):
    parent: str | None = None


@dataclass
class TagRevision(Revision):
    color: str = "#000000"
