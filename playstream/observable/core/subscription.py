"""
Playstream Subscription - One Observer Bound to One Producer Run
================================================================

A Subscription is created by ``Observable.subscribe``. Construction runs the
producer immediately; ``unsubscribe`` runs the producer's cleanup at most once.
"""

import logging
from typing import Any, Callable, Optional

from .observer import Observer

logger = logging.getLogger(__name__)

Cleanup = Callable[[], Any]
SubscriberFunction = Callable[[Observer], Optional[Cleanup]]


class Subscription:
    """
    Binds one observer to one invocation of a subscriber function.

    ``observer.start(self)`` is called first. The observer may unsubscribe from
    inside ``start``, in which case the subscriber function never runs.

    Attributes:
        observer: The normalized observer receiving notifications.
        closed: False until ``unsubscribe`` is called; never goes back.

    Example:
        ```python
        with subject.subscribe(print):
            subject.next(1)  # printed
        subject.next(2)      # not printed, the block unsubscribed
        ```
    """

    def __init__(self, observer: Observer, subscriber: SubscriberFunction) -> None:
        self.observer = observer
        self.closed = False
        self._cleanup: Optional[Cleanup] = None

        observer.start(self)
        if self.closed:
            return

        cleanup = subscriber(observer)
        if self.closed:
            # unsubscribed while the subscriber was still running
            if cleanup is not None:
                cleanup()
        else:
            self._cleanup = cleanup

    def unsubscribe(self) -> None:
        """
        Mark the subscription closed, then run the cleanup once.

        The subscription is closed before the cleanup runs, so a cleanup that
        raises leaves it closed and is never run again.
        """
        if self.closed:
            return

        # Closed before cleanup runs, so a raising cleanup is never retried
        self.closed = True
        cleanup, self._cleanup = self._cleanup, None
        if cleanup is not None:
            logger.debug("Running cleanup for %r", self)
            cleanup()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unsubscribe()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Subscription {state}>"
