"""Synchronous event bus for build lifecycle events."""

from typing import Any, Callable


class EventBus:
    """Dispatches build events to listeners in registration order.

    A listener subscribed without event types receives every event;
    otherwise it only sees instances of the given types.
    """

    def __init__(self) -> None:
        self._listeners: list[tuple[tuple[type, ...], Callable[[Any], None]]] = []

    def subscribe(self, callback: Callable[[Any], None], *event_types: type) -> None:
        self._listeners.append((event_types, callback))

    def emit(self, event: Any) -> None:
        for event_types, callback in self._listeners:
            if not event_types or isinstance(event, event_types):
                callback(event)
