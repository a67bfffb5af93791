"""Typed lifecycle events.

Every lifecycle phase has a base event type here. Object types bind their
own subclasses (``PasswordDeletedEvent``...) so listeners can subscribe to
one object type or, through the phase's base class, to all of them.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

EVENT_PHASES = (
    "beforeCloned",
    "cloned",
    "afterCloned",
    "beforeDeleted",
    "deleted",
    "afterDeleted",
    "beforeDestroyed",
    "destroyed",
    "afterDestroyed",
)


@dataclass
class LifecycleEvent:
    """Base of all typed lifecycle events."""

    phase: ClassVar[str] = ""


@dataclass
class CloneEvent(LifecycleEvent):
    """Payload of the clone phases.

    Attributes:
        original: The object being cloned
        clone: The new, not yet persisted object (None before it exists)
    """

    original: Any = None
    clone: Any = None


@dataclass
class SubjectEvent(LifecycleEvent):
    """Payload of the delete and destroy phases.

    Attributes:
        subject: The object changing state
    """

    subject: Any = None


class BeforeClonedEvent(CloneEvent):
    phase = "beforeCloned"


class ClonedEvent(CloneEvent):
    phase = "cloned"


class AfterClonedEvent(CloneEvent):
    phase = "afterCloned"


class BeforeDeletedEvent(SubjectEvent):
    """Fired after the soft-delete flag is set, before it is persisted."""

    phase = "beforeDeleted"


class DeletedEvent(SubjectEvent):
    phase = "deleted"


class AfterDeletedEvent(SubjectEvent):
    phase = "afterDeleted"


class BeforeDestroyedEvent(SubjectEvent):
    """Fired before the row is removed permanently."""

    phase = "beforeDestroyed"


class DestroyedEvent(SubjectEvent):
    phase = "destroyed"


class AfterDestroyedEvent(SubjectEvent):
    phase = "afterDestroyed"
