"""Association rows between objects."""

from dataclasses import dataclass


@dataclass
class PasswordTagRelation:
    """Links a password to a tag.

    Hidden relations are skipped when browsing a tag but still answer
    "is this password tagged with X". The relation has its own lifecycle:
    it can be soft-deleted without touching either endpoint.
    """

    id: int | None = None
    uuid: str = ""
    password: str = ""
    tag: str = ""
    user_id: str = ""
    hidden: bool = False
    client: str = ""
    deleted: bool = False
    created_at: str | None = None
    updated_at: str | None = None

    def is_deleted(self) -> bool:
        return bool(self.deleted)
