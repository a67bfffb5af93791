"""Persister capabilities for each object kind.

Persisters hold the per-type save rules. The generic lifecycle engine only
calls ``save`` and ``hard_delete``.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Generic, Protocol, TypeVar

from vaultforge.errors import InvalidObject
from vaultforge.models import PasswordRevision, Revision
from vaultforge.models.base import timestamp, utc_now
from vaultforge.persistence.mapper import ObjectMapper

ModelT = TypeVar("ModelT")
RevisionT = TypeVar("RevisionT", bound=Revision)

CSE_TYPES = ("none", "CSEv1r1")
SSE_TYPES = ("none", "SSEv1r1", "SSEv1r2", "SSEv2r1", "SSEv3r1")
MAX_LABEL_LENGTH = 256
STATE_COLUMNS = ("deleted", "updated_at")


class FieldCipher(Protocol):
    """Encrypts and decrypts revision payload fields.

    Implementations live outside the core; a cipher returns a new revision
    and leaves its argument untouched.
    """

    def encrypt(self, revision: Revision) -> Revision: ...

    def decrypt(self, revision: Revision) -> Revision: ...


class ModelPersister(Generic[ModelT]):
    """Inserts new objects and updates stored ones through a mapper."""

    def __init__(self, mapper: ObjectMapper[ModelT], clock: Callable[[], datetime] = utc_now):
        self.mapper = mapper
        self.clock = clock

    def save(self, obj: ModelT) -> ModelT:
        now = timestamp(self.clock())
        if obj.id is None:
            obj.created_at = obj.created_at or now
            obj.updated_at = obj.updated_at or now
            return self.mapper.insert(obj)

        obj.updated_at = now
        return self.mapper.update(obj)

    def hard_delete(self, obj: ModelT) -> None:
        self.mapper.delete(obj)


class RevisionPersister(ModelPersister[RevisionT]):
    """Validates, hashes and optionally encrypts revisions before storing.

    Revisions are append-only: saving a stored revision writes only its
    state columns (``deleted``, ``updated_at``) and never the payload, so
    a decrypted copy read back through a service can be saved safely.
    """

    def __init__(
        self,
        mapper: ObjectMapper[RevisionT],
        cipher: FieldCipher | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        super().__init__(mapper, clock)
        self.cipher = cipher

    def save(self, revision: RevisionT) -> RevisionT:
        if revision.id is not None:
            revision.updated_at = timestamp(self.clock())
            return self.mapper.update(revision, columns=STATE_COLUMNS)

        self.validate(revision)
        if isinstance(revision, PasswordRevision):
            revision.hash = password_hash(revision.password)
        revision.edited = revision.edited or timestamp(self.clock())

        if self.cipher is None:
            return super().save(revision)

        stored = super().save(self.cipher.encrypt(replace(revision)))
        revision.id = stored.id
        revision.created_at = stored.created_at
        revision.updated_at = stored.updated_at
        return revision

    def validate(self, revision: RevisionT) -> None:
        """Raise InvalidObject if the revision cannot be stored."""
        if not revision.model:
            raise InvalidObject("Revision has no parent object")
        if not revision.user_id:
            raise InvalidObject("Revision has no owner")
        if len(revision.label) > MAX_LABEL_LENGTH:
            raise InvalidObject(f"Label exceeds {MAX_LABEL_LENGTH} characters")
        if revision.cse_type not in CSE_TYPES:
            raise InvalidObject(f"Invalid client side encryption type '{revision.cse_type}'")
        if revision.sse_type not in SSE_TYPES:
            raise InvalidObject(f"Invalid server side encryption type '{revision.sse_type}'")
        if getattr(revision, "parent", None) and revision.parent == revision.model:
            raise InvalidObject("Folder can not be its own parent")


def password_hash(password: str) -> str:
    """SHA-1 hex digest used for breach lookups; empty for no password."""
    if not password:
        return ""
    return hashlib.sha1(password.encode("utf-8")).hexdigest()
