"""Synchronous dispatcher for typed lifecycle events."""

import logging
from collections.abc import Callable
from typing import Any

from vaultforge.events.types import LifecycleEvent

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


class EventBus:
    """Delivers events to listeners subscribed to the event's type.

    A listener subscribed to a base type (e.g. ``DeletedEvent``) receives
    every subclass of it. Listeners run in subscription order, most
    specific type first. Listener exceptions propagate to the dispatcher.
    """

    def __init__(self):
        self._listeners: dict[type, list[Listener]] = {}

    def subscribe(self, event_type: type[LifecycleEvent], listener: Listener) -> None:
        listeners = self._listeners.setdefault(event_type, [])
        if listener not in listeners:
            listeners.append(listener)

    def unsubscribe(self, event_type: type[LifecycleEvent], listener: Listener) -> None:
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def dispatch(self, event: LifecycleEvent) -> LifecycleEvent:
        """Deliver ``event`` to every matching listener and return it."""
        for event_type in type(event).__mro__:
            for listener in list(self._listeners.get(event_type, ())):
                listener(event)
        logger.debug("Dispatched %s", type(event).__name__)
        return event
