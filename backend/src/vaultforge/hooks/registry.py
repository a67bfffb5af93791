"""Hook registry for VaultForge.

Hooks are untyped, string-keyed observers of object lifecycle phases.
Listeners register under ``(object_type, phase)``, e.g.
``("Password", "preDelete")``, and receive the objects involved as
positional arguments. Registration happens at process startup; lifecycle
operations only read the registry.
"""

from collections.abc import Callable
from typing import Any

# Hook listener signature: (*objects) -> None
HookFn = Callable[..., Any]

HOOK_PHASES = (
    "preClone",
    "postClone",
    "preDelete",
    "postDelete",
    "preDestroy",
    "postDestroy",
)


class HookRegistry:
    """Process-wide registry of lifecycle hook listeners.

    Example:
        @hook("Password", "postDelete")
        def forget_shares(password):
            ...
    """

    _listeners: dict[tuple[str, str], list[HookFn]] = {}

    @classmethod
    def register(cls, object_type: str, phase: str, listener: HookFn) -> None:
        """Register a listener for a phase of an object type.

        Idempotent - registering the same listener twice is a no-op. Keys
        are plain strings; a phase the core never emits (see HOOK_PHASES)
        is accepted and can be emitted by application code.

        Args:
            object_type: Object type name (e.g., "Password")
            phase: Hook phase (e.g., "preDelete")
            listener: Callable receiving the phase's objects
        """
        listeners = cls._listeners.setdefault((object_type, phase), [])
        if listener in listeners:
            return
        listeners.append(listener)

    @classmethod
    def unregister(cls, object_type: str, phase: str, listener: HookFn) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        listeners = cls._listeners.get((object_type, phase), [])
        if listener in listeners:
            listeners.remove(listener)

    @classmethod
    def emit(cls, object_type: str, phase: str, *args: Any) -> None:
        """Invoke every listener of ``(object_type, phase)`` in registration order.

        No listeners is not an error. Listener exceptions propagate.
        """
        for listener in list(cls._listeners.get((object_type, phase), ())):
            listener(*args)

    @classmethod
    def listeners(cls, object_type: str, phase: str) -> list[HookFn]:
        return list(cls._listeners.get((object_type, phase), ()))

    @classmethod
    def is_registered(cls, object_type: str, phase: str) -> bool:
        """Check if any listener is registered for the key."""
        return bool(cls._listeners.get((object_type, phase)))

    @classmethod
    def list_registered(cls) -> list[tuple[str, str]]:
        """List all keys that have at least one listener."""
        return sorted(key for key, fns in cls._listeners.items() if fns)

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._listeners.clear()


def hook(object_type: str, phase: str) -> Callable[[HookFn], HookFn]:
    """Decorator to register a hook listener.

    Usage:
        @hook("Password", "preDelete")
        def audit_delete(password):
            ...
    """

    def decorator(fn: HookFn) -> HookFn:
        HookRegistry.register(object_type, phase, fn)
        return fn

    return decorator
