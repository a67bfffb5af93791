"""Event types bound to concrete object types.

Passwords, folders and tags (and password revisions) are fully
instrumented. Folder/tag revisions and tag relations have no bindings;
their lifecycle runs without typed events.
"""

from vaultforge.events.types import (
    AfterClonedEvent,
    AfterDeletedEvent,
    AfterDestroyedEvent,
    BeforeClonedEvent,
    BeforeDeletedEvent,
    BeforeDestroyedEvent,
    ClonedEvent,
    DeletedEvent,
    DestroyedEvent,
    LifecycleEvent,
)

# Password


class BeforePasswordClonedEvent(BeforeClonedEvent):
    pass


class PasswordClonedEvent(ClonedEvent):
    pass


class AfterPasswordClonedEvent(AfterClonedEvent):
    pass


class BeforePasswordDeletedEvent(BeforeDeletedEvent):
    pass


class PasswordDeletedEvent(DeletedEvent):
    pass


class AfterPasswordDeletedEvent(AfterDeletedEvent):
    pass


class BeforePasswordDestroyedEvent(BeforeDestroyedEvent):
    pass


class PasswordDestroyedEvent(DestroyedEvent):
    pass


class AfterPasswordDestroyedEvent(AfterDestroyedEvent):
    pass


# PasswordRevision


class BeforePasswordRevisionClonedEvent(BeforeClonedEvent):
    pass


class PasswordRevisionClonedEvent(ClonedEvent):
    pass


class AfterPasswordRevisionClonedEvent(AfterClonedEvent):
    pass


class BeforePasswordRevisionDeletedEvent(BeforeDeletedEvent):
    pass


class PasswordRevisionDeletedEvent(DeletedEvent):
    pass


class AfterPasswordRevisionDeletedEvent(AfterDeletedEvent):
    pass


class BeforePasswordRevisionDestroyedEvent(BeforeDestroyedEvent):
    pass


class PasswordRevisionDestroyedEvent(DestroyedEvent):
    pass


class AfterPasswordRevisionDestroyedEvent(AfterDestroyedEvent):
    pass


# Folder


class BeforeFolderClonedEvent(BeforeClonedEvent):
    pass


class FolderClonedEvent(ClonedEvent):
    pass


class AfterFolderClonedEvent(AfterClonedEvent):
    pass


class BeforeFolderDeletedEvent(BeforeDeletedEvent):
    pass


class FolderDeletedEvent(DeletedEvent):
    pass


class AfterFolderDeletedEvent(AfterDeletedEvent):
    pass


class BeforeFolderDestroyedEvent(BeforeDestroyedEvent):
    pass


class FolderDestroyedEvent(DestroyedEvent):
    pass


class AfterFolderDestroyedEvent(AfterDestroyedEvent):
    pass


# Tag


class BeforeTagClonedEvent(BeforeClonedEvent):
    pass


class TagClonedEvent(ClonedEvent):
    pass


class AfterTagClonedEvent(AfterClonedEvent):
    pass


class BeforeTagDeletedEvent(BeforeDeletedEvent):
    pass


class TagDeletedEvent(DeletedEvent):
    pass


class AfterTagDeletedEvent(AfterDeletedEvent):
    pass


class BeforeTagDestroyedEvent(BeforeDestroyedEvent):
    pass


class TagDestroyedEvent(DestroyedEvent):
    pass


class AfterTagDestroyedEvent(AfterDestroyedEvent):
    pass


BUILTIN_EVENTS: dict[str, dict[str, type[LifecycleEvent]]] = {
    "Password": {
        "beforeCloned": BeforePasswordClonedEvent,
        "cloned": PasswordClonedEvent,
        "afterCloned": AfterPasswordClonedEvent,
        "beforeDeleted": BeforePasswordDeletedEvent,
        "deleted": PasswordDeletedEvent,
        "afterDeleted": AfterPasswordDeletedEvent,
        "beforeDestroyed": BeforePasswordDestroyedEvent,
        "destroyed": PasswordDestroyedEvent,
        "afterDestroyed": AfterPasswordDestroyedEvent,
    },
    "PasswordRevision": {
        "beforeCloned": BeforePasswordRevisionClonedEvent,
        "cloned": PasswordRevisionClonedEvent,
        "afterCloned": AfterPasswordRevisionClonedEvent,
        "beforeDeleted": BeforePasswordRevisionDeletedEvent,
        "deleted": PasswordRevisionDeletedEvent,
        "afterDeleted": AfterPasswordRevisionDeletedEvent,
        "beforeDestroyed": BeforePasswordRevisionDestroyedEvent,
        "destroyed": PasswordRevisionDestroyedEvent,
        "afterDestroyed": AfterPasswordRevisionDestroyedEvent,
    },
    "Folder": {
        "beforeCloned": BeforeFolderClonedEvent,
        "cloned": FolderClonedEvent,
        "afterCloned": AfterFolderClonedEvent,
        "beforeDeleted": BeforeFolderDeletedEvent,
        "deleted": FolderDeletedEvent,
        "afterDeleted": AfterFolderDeletedEvent,
        "beforeDestroyed": BeforeFolderDestroyedEvent,
        "destroyed": FolderDestroyedEvent,
        "afterDestroyed": AfterFolderDestroyedEvent,
    },
    "Tag": {
        "beforeCloned": BeforeTagClonedEvent,
        "cloned": TagClonedEvent,
        "afterCloned": AfterTagClonedEvent,
        "beforeDeleted": BeforeTagDeletedEvent,
        "deleted": TagDeletedEvent,
        "afterDeleted": AfterTagDeletedEvent,
        "beforeDestroyed": BeforeTagDestroyedEvent,
        "destroyed": TagDestroyedEvent,
        "afterDestroyed": AfterTagDestroyedEvent,
    },
}
