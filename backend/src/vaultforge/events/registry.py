"""Static bindings from (object type, phase) to typed event factories.

Follows the same pattern as HookRegistry: populated at process startup,
read by lifecycle operations. A missing binding is a normal lookup miss.
"""

from collections.abc import Callable

from vaultforge.events.types import EVENT_PHASES, LifecycleEvent

EventFactory = Callable[..., LifecycleEvent]


class EventRegistry:
    """Registry of typed event factories keyed by (object type, phase)."""

    _bindings: dict[tuple[str, str], EventFactory] = {}

    @classmethod
    def register(cls, object_type: str, phase: str, factory: EventFactory) -> None:
        """Bind an event factory to an object type and phase.

        Idempotent - re-binding an existing key is a no-op.

        Raises:
            ValueError: If the phase is not a known event phase
        """
        if phase not in EVENT_PHASES:
            raise ValueError(
                f"Unknown event phase '{phase}'. Expected one of: {', '.join(EVENT_PHASES)}"
            )
        if (object_type, phase) in cls._bindings:
            return
        cls._bindings[(object_type, phase)] = factory

    @classmethod
    def resolve(cls, object_type: str, phase: str) -> EventFactory | None:
        """Return the factory bound to the key, or None."""
        return cls._bindings.get((object_type, phase))

    @classmethod
    def is_registered(cls, object_type: str, phase: str) -> bool:
        return (object_type, phase) in cls._bindings

    @classmethod
    def list_registered(cls) -> list[tuple[str, str]]:
        return sorted(cls._bindings.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all bindings. Primarily for testing."""
        cls._bindings.clear()


def register_builtin_events() -> None:
    """Bind the event types shipped with VaultForge.

    Called at application startup.
    """
    from vaultforge.events.objects import BUILTIN_EVENTS

    for object_type, phases in BUILTIN_EVENTS.items():
        for phase, event_type in phases.items():
            EventRegistry.register(object_type, phase, event_type)
