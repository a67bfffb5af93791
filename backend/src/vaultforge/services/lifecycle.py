"""Generic lifecycle engine for versioned objects.

One LifecycleService is instantiated per concrete object type. It is
parameterized over a Persister capability (save / hard delete) and a read
store, and drives both extension mechanisms at every transition:

- HookRegistry: untyped listeners keyed by (object type, phase)
- EventBus: typed events resolved through EventRegistry

Ordering, for clone, delete and destroy alike:
    pre* hook -> state change -> before* event -> persist
    -> bare event -> after* event -> post* hook

State machine per object: Active -> SoftDeleted -> HardDeleted. There is
no undelete. Notifications are not transactional with storage: if a step
fails, phases already fired stay fired.
"""

from __future__ import annotations

import logging
import uuid as uuid_lib
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar

from vaultforge.errors import InvalidObject, TypeMismatch
from vaultforge.events.bus import EventBus
from vaultforge.events.registry import EventRegistry
from vaultforge.hooks.registry import HookRegistry
from vaultforge.models.base import IDENTITY_FIELDS, field_names, object_type, timestamp, utc_now

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Persister(Protocol[ModelT]):
    """Write capability for one object type."""

    def save(self, obj: ModelT) -> ModelT:
        """Persist ``obj`` and return it fully stored, or raise."""
        ...

    def hard_delete(self, obj: ModelT) -> None:
        """Remove ``obj`` permanently."""
        ...


class ObjectStore(Protocol[ModelT]):
    """Read capability for one object type."""

    def find_by_uuid(self, uuid: str) -> ModelT: ...

    def find_all_by_user_id(self, user_id: str) -> list[ModelT]: ...

    def find_all_deleted(self) -> list[ModelT]: ...

    def find_all(self) -> list[ModelT]: ...


def new_uuid() -> str:
    return str(uuid_lib.uuid4())


class LifecycleService(Generic[ModelT]):
    """Orchestrates clone, delete and destroy for one object type."""

    def __init__(
        self,
        model_class: type[ModelT],
        persister: Persister[ModelT],
        store: ObjectStore[ModelT],
        *,
        event_bus: EventBus | None = None,
        log: logging.Logger | None = None,
        clock: Callable[[], datetime] = utc_now,
        uuid_factory: Callable[[], str] = new_uuid,
    ):
        self.model_class = model_class
        self.object_type = object_type(model_class)
        self.persister = persister
        self.store = store
        self.event_bus = event_bus or EventBus()
        self.log = log or logger
        self.clock = clock
        self.uuid_factory = uuid_factory
        self._missing_events: set[str] = set()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_deleted(self) -> list[ModelT]:
        return self.store.find_all_deleted()

    def find_by_user_id(self, user_id: str) -> list[ModelT]:
        return self.store.find_all_by_user_id(user_id)

    def find_by_uuid(self, uuid: str) -> ModelT:
        """Raises NotFound or AmbiguousResult unless exactly one row matches."""
        return self.store.find_by_uuid(uuid)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def save(self, obj: ModelT) -> ModelT:
        return self.persister.save(obj)

    def clone(self, source: ModelT, overwrites: Mapping[str, Any] | None = None) -> ModelT:
        """Return a new, unsaved copy of ``source``.

        Identity fields are never copied; the clone gets a fresh uuid and
        fresh timestamps. Fields named in ``overwrites`` take the given
        value instead of the source's.

        Raises:
            TypeMismatch: If ``source`` is not of this service's type
            InvalidObject: If ``overwrites`` names an unknown field
        """
        self._check_type(source)
        overwrites = dict(overwrites or {})
        unknown = set(overwrites) - set(field_names(self.model_class))
        if unknown:
            raise InvalidObject(
                f"Unknown {self.object_type} field(s): {', '.join(sorted(unknown))}"
            )

        HookRegistry.emit(self.object_type, "preClone", source)
        self._fire_event("beforeCloned", original=source)
        clone = self._clone_model(source, overwrites)
        self._fire_event("cloned", original=source, clone=clone)
        self._fire_event("afterCloned", original=source, clone=clone)
        HookRegistry.emit(self.object_type, "postClone", source, clone)

        return clone

    def delete(self, obj: ModelT) -> None:
        """Soft-delete ``obj``.

        Re-running on an already deleted object stores the same state but
        fires every hook and event again.

        Raises:
            TypeMismatch: If ``obj`` is not of this service's type
        """
        self._check_type(obj)
        HookRegistry.emit(self.object_type, "preDelete", obj)
        obj.deleted = True
        self._fire_event("beforeDeleted", subject=obj)
        self.save(obj)
        self._fire_event("deleted", subject=obj)
        self._fire_event("afterDeleted", subject=obj)
        HookRegistry.emit(self.object_type, "postDelete", obj)
        self.log.debug("Deleted %s %s", self.object_type, getattr(obj, "uuid", None))

    def destroy(self, obj: ModelT) -> None:
        """Remove ``obj`` permanently, soft-deleting it first if still live.

        Raises:
            TypeMismatch: If ``obj`` is not of this service's type
        """
        self._check_type(obj)
        HookRegistry.emit(self.object_type, "preDestroy", obj)
        if not obj.is_deleted():
            self.delete(obj)
        self._fire_event("beforeDestroyed", subject=obj)
        self.persister.hard_delete(obj)
        self._fire_event("destroyed", subject=obj)
        self._fire_event("afterDestroyed", subject=obj)
        HookRegistry.emit(self.object_type, "postDestroy", obj)
        self.log.debug("Destroyed %s %s", self.object_type, getattr(obj, "uuid", None))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _check_type(self, obj: Any) -> None:
        if type(obj) is not self.model_class:
            raise TypeMismatch(self.model_class, type(obj))

    def _now(self) -> str:
        return timestamp(self.clock())

    def _clone_model(self, original: ModelT, overwrites: dict[str, Any]) -> ModelT:
        values: dict[str, Any] = {}
        for name in field_names(self.model_class):
            if name in IDENTITY_FIELDS:
                continue
            values[name] = overwrites[name] if name in overwrites else getattr(original, name)

        now = self._now()
        values["uuid"] = self.uuid_factory()
        values["created_at"] = now
        values["updated_at"] = now
        return self.model_class(**values)

    def _fire_event(self, phase: str, **payload: Any) -> None:
        """Dispatch the typed event bound to (object type, phase).

        A missing binding is logged once per phase and skipped.
        """
        factory = EventRegistry.resolve(self.object_type, phase)
        if factory is None:
            if phase not in self._missing_events:
                self._missing_events.add(phase)
                self.log.error("Missing event: %s.%s", self.object_type, phase)
            return
        self.event_bus.dispatch(factory(**payload))
