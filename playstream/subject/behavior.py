"""
Playstream BehaviorSubject - A Variable With Subscriptions
==========================================================

A BehaviorSubject always holds one value. ``get()`` reads it at any time and
every new observer receives it synchronously, before ``subscribe`` returns.
An error is sticky: ``get()`` raises it and late observers receive it after
the held value.

Example:
    ```python
    from playstream import BehaviorSubject

    volume = BehaviorSubject(0.5)
    volume.subscribe(print)  # 0.5, immediately
    volume.next(0.8)         # 0.8
    volume.get()             # 0.8
    ```
"""

import asyncio
import logging
from typing import Any, Optional, TypeVar

from ..exceptions import SourceCompletedError, as_exception
from ..observable.core.observable import Observable
from ..observable.core.subscription import Subscription
from .policies import LastValueReplay
from .subject import Subject

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BehaviorSubject(Subject[T]):
    """Subject that holds and replays its latest value."""

    def __init__(self, initial: T) -> None:
        self._last_value: LastValueReplay[T] = LastValueReplay(initial)
        super().__init__(replay=self._last_value)

    def get(self) -> T:
        """
        Return the latest value.

        Raises:
            The stored error once ``error`` has been called. Exceptions are
            raised as they are; other error values are wrapped in StreamError.
        """
        if self._last_value.has_error:
            raise as_exception(self._last_value.error)
        return self._last_value.last

    @property
    def value(self) -> T:
        return self.get()

    def has_error(self) -> bool:
        return self._last_value.has_error

    @classmethod
    async def from_subject(cls, subject: Observable[T]) -> "BehaviorSubject[T]":
        """
        Build a BehaviorSubject seeded with the first value of ``subject``.

        Later values, errors and completion of ``subject`` are forwarded to the
        new BehaviorSubject. The coroutine returns once the temporary
        subscription used to wait for the first value has been torn down; that
        teardown happens on a later loop iteration, never inside the
        notification that delivered the value.
        Cancelling the coroutine detaches everything it attached to ``subject``.

        Raises:
            SourceCompletedError: ``subject`` completed before any value.
            The error of ``subject`` if it failed before any value.
        """
        loop = asyncio.get_running_loop()
        ready: "asyncio.Future[BehaviorSubject[T]]" = loop.create_future()
        bootstrap: Optional[Subscription] = None
        forward: Optional[Subscription] = None
        settled = False

        def finish(result: Optional["BehaviorSubject[T]"], error: Any = None) -> None:
            if bootstrap is not None:
                bootstrap.unsubscribe()
            if ready.done():
                return
            if result is None:
                ready.set_exception(error)
            else:
                ready.set_result(result)

        def on_first(value: T) -> None:
            nonlocal settled, forward
            if settled:
                return
            settled = True
            behavior = cls(value)
            forward = subject.subscribe(behavior.next, behavior.error, behavior.complete)
            loop.call_soon(finish, behavior)

        def on_error(error: Any) -> None:
            nonlocal settled
            if settled:
                return
            settled = True
            loop.call_soon(finish, None, as_exception(error))

        def on_complete() -> None:
            nonlocal settled
            if settled:
                return
            settled = True
            error = SourceCompletedError(f"{subject!r} completed before any value")
            loop.call_soon(finish, None, error)

        bootstrap = subject.subscribe(on_first, on_error, on_complete)
        logger.debug("Waiting for the first value of %r", subject)
        try:
            return await ready
        except asyncio.CancelledError:
            # the caller gave up, nothing may stay attached to the source
            settled = True
            bootstrap.unsubscribe()
            if forward is not None:
                forward.unsubscribe()
            logger.debug("Stopped waiting for the first value of %r", subject)
            raise
