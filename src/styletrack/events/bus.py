"""Synchronous event bus connecting the session controller to its observers."""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventBus:
    """Publish-subscribe bus for tracker events.

    Callbacks registered with :meth:`on_all` see every event before the
    type-specific ones do; each group runs in registration order on the
    emitting thread.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Callable[[Any], None]]] = {}
        self._global_listeners: list[Callable[[Any], None]] = []

    def subscribe(self, event_type: type, callback: Callable[[Any], None]) -> None:
        self._listeners.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type, callback: Callable[[Any], None]) -> None:
        listeners = self._listeners.get(event_type, [])
        if callback in listeners:
            listeners.remove(callback)

    def on_all(self, callback: Callable[[Any], None]) -> None:
        self._global_listeners.append(callback)

    def emit(self, event: Any) -> None:
        logger.debug("event: %r", event)
        for cb in self._global_listeners:
            cb(event)
        for cb in list(self._listeners.get(type(event), [])):
            cb(event)
