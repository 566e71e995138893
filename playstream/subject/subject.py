"""
Playstream Subject - Hot Multicast Producer
===========================================

A Subject is both an Observable (consumers ``subscribe``) and a publisher
(producers call ``next``, ``error``, ``complete``). Every publishing call
fans out synchronously to the observers attached at that moment, in
subscription order, before it returns.

The behavior of the subject family is assembled from parts rather than
inherited:

- one ObserverRegistry (the multicast core)
- one replay policy (what late observers are told)
- one delivery policy (when values reach the observers)

``Subject()`` uses NoReplay and ImmediateDelivery. BehaviorSubject,
ReplaySubject and IdleSubject only pick other policies.

After ``error`` or ``complete`` a subject is terminated: further publishing
calls are ignored and logged, or raise SubjectTerminatedError when
``CONFIG.raise_on_terminated`` is set.

Example:
    ```python
    from playstream import Subject

    clicks = Subject()
    subscription = clicks.subscribe(lambda v: print("got", v))
    clicks.next(1)  # got 1
    subscription.unsubscribe()
    clicks.next(2)  # nobody listening
    ```
"""

import logging
from typing import Any, Callable, Optional, TypeVar

from ..config import CONFIG
from ..exceptions import SubjectTerminatedError
from ..observable.core.observable import Observable
from ..observable.core.observer import Observer
from .policies import DeliveryPolicy, ImmediateDelivery, NoReplay, ReplayPolicy
from .registry import ObserverRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subject(Observable[T]):
    """
    Multicast producer: observer registry plus synchronous broadcast.

    Args:
        replay: What newly attached observers receive. Defaults to NoReplay.
        delivery: When published values are broadcast. Defaults to
            ImmediateDelivery.
    """

    def __init__(
        self,
        replay: Optional[ReplayPolicy[T]] = None,
        delivery: Optional[DeliveryPolicy] = None,
    ) -> None:
        super().__init__(self._attach)
        self._registry = ObserverRegistry()
        self._replay: ReplayPolicy[T] = replay if replay is not None else NoReplay()
        self._delivery = delivery if delivery is not None else ImmediateDelivery()
        self._terminated = False

    @property
    def observer_count(self) -> int:
        """Number of observers currently attached."""
        return len(self._registry)

    @property
    def terminated(self) -> bool:
        """True once ``error`` or ``complete`` has been called."""
        return self._terminated

    def next(self, value: T) -> None:
        """Publish ``value`` to every attached observer."""
        if not self._accepts("next"):
            return
        self._replay.record_next(value)
        self._delivery.deliver(value, self._registry.broadcast_next)

    def error(self, error: Any) -> None:
        """Publish a terminal error to every attached observer."""
        if not self._accepts("error"):
            return
        self._terminated = True
        self._delivery.flush()
        self._replay.record_error(error)
        self._registry.broadcast_error(error)

    def complete(self) -> None:
        """Publish completion to every attached observer."""
        if not self._accepts("complete"):
            return
        self._terminated = True
        self._delivery.flush()
        self._replay.record_complete()
        self._registry.broadcast_complete()

    def _attach(self, observer: Observer) -> Callable[[], None]:
        self._registry.add(observer)
        logger.debug("Observer attached to %r (%d total)", self, len(self._registry))
        try:
            self._replay.replay(observer)
        except BaseException:
            # subscribe raises, so no subscription exists to detach it later
            self._registry.remove(observer)
            raise

        def detach() -> None:
            self._registry.remove(observer)
            logger.debug("Observer detached from %r", self)

        return detach

    def _accepts(self, operation: str) -> bool:
        if not self._terminated:
            return True
        if CONFIG.raise_on_terminated:
            raise SubjectTerminatedError(
                f"{operation}() called on {self!r} after it terminated"
            )
        logger.warning(
            "%s() called on %r after it terminated; ignored", operation, self
        )
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(observers={len(self._registry)})"
