"""VaultForge typed lifecycle events.

Usage:
    from vaultforge.events import EventBus, register_builtin_events
    from vaultforge.events.objects import PasswordDeletedEvent

    register_builtin_events()
    bus = EventBus()
    bus.subscribe(PasswordDeletedEvent, lambda event: audit(event.subject))
"""

from vaultforge.events.bus import EventBus
from vaultforge.events.registry import EventFactory, EventRegistry, register_builtin_events
from vaultforge.events.types import (
    EVENT_PHASES,
    AfterClonedEvent,
    AfterDeletedEvent,
    AfterDestroyedEvent,
    BeforeClonedEvent,
    BeforeDeletedEvent,
    BeforeDestroyedEvent,
    CloneEvent,
    ClonedEvent,
    DeletedEvent,
    DestroyedEvent,
    LifecycleEvent,
    SubjectEvent,
)

__all__ = [
    "EVENT_PHASES",
    "AfterClonedEvent",
    "AfterDeletedEvent",
    "AfterDestroyedEvent",
    "BeforeClonedEvent",
    "BeforeDeletedEvent",
    "BeforeDestroyedEvent",
    "CloneEvent",
    "ClonedEvent",
    "DeletedEvent",
    "DestroyedEvent",
    "EventBus",
    "EventFactory",
    "EventRegistry",
    "LifecycleEvent",
    "SubjectEvent",
    "register_builtin_events",
]
