"""
Playstream ObserverRegistry - Ordered Fan-out to Attached Observers
===================================================================

The registry is the multicast core shared by every subject: an ordered list
of observers plus synchronous broadcast in subscription order.

Broadcasts iterate over a snapshot of the list. An observer that subscribes
during a broadcast first hears the next one; an observer that unsubscribes
during a broadcast still receives the notification in progress.
"""

import logging
from typing import Any, Iterator, List

from ..config import CONFIG
from ..observable.core.observer import Observer

logger = logging.getLogger(__name__)


class ObserverRegistry:
    """Ordered collection of observers with synchronous broadcast."""

    __slots__ = ("_observers",)

    def __init__(self) -> None:
        self._observers: List[Observer] = []

    def add(self, observer: Observer) -> None:
        """Append ``observer``; it is notified after every earlier observer."""
        self._observers.append(observer)

    def remove(self, observer: Observer) -> None:
        """Detach ``observer`` by identity. Unknown observers are ignored."""
        self._observers = [o for o in self._observers if o is not observer]

    def __len__(self) -> int:
        return len(self._observers)

    def __iter__(self) -> Iterator[Observer]:
        return iter(tuple(self._observers))

    def __contains__(self, observer: object) -> bool:
        return any(o is observer for o in self._observers)

    def broadcast_next(self, value: Any) -> None:
        self._broadcast("next", value)

    def broadcast_error(self, error: Any) -> None:
        self._broadcast("error", error)

    def broadcast_complete(self) -> None:
        self._broadcast("complete")

    def _broadcast(self, handler_name: str, *args: Any) -> None:
        for observer in tuple(self._observers):
            handler = getattr(observer, handler_name)
            try:
                handler(*args)
            except Exception:
                if not CONFIG.isolate_observer_errors:
                    raise
                logger.exception(
                    "Observer %s handler raised; continuing with remaining observers",
                    handler_name,
                )
