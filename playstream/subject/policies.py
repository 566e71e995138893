"""
Playstream Subject Policies - Replay and Delivery Strategies
============================================================

A subject is one ObserverRegistry combined with two interchangeable policies:

Replay policies decide what a newly attached observer is told about the past:
- ``NoReplay`` - nothing; terminal notifications are transient
- ``LastValueReplay`` - the latest value, then a sticky error if any
- ``BoundedReplay`` - up to ``size`` latest values, then a sticky error or
  completion

Delivery policies decide when a published value reaches the registry:
- ``ImmediateDelivery`` - synchronously, inside ``next``
- ``IdleCoalescingDelivery`` - on the host's next idle period, keeping only
  the latest value of a burst
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import (
    Any,
    Callable,
    Deque,
    Generic,
    Hashable,
    Optional,
    Tuple,
    TypeVar,
)

from ..observable.core.observer import Observer
from ..scheduling import IdleScheduler

logger = logging.getLogger(__name__)

T = TypeVar("T")

Broadcast = Callable[[Any], None]

_NOTHING = object()


# ============================================================================
# Replay policies
# ============================================================================


class ReplayPolicy(ABC, Generic[T]):
    """
    Records what a subject publishes and replays it to late observers.

    Subclasses must implement:
    - ``replay(observer)`` - called right after an observer is registered
    """

    def record_next(self, value: T) -> None:
        pass

    def record_error(self, error: Any) -> None:
        pass

    def record_complete(self) -> None:
        pass

    @abstractmethod
    def replay(self, observer: Observer) -> None:
        pass


class NoReplay(ReplayPolicy[T]):
    """Late observers hear only what is published after they attach."""

    def replay(self, observer: Observer) -> None:
        pass


class _StickyError:
    """Mixin holding an error that, once set, is replayed to every observer."""

    _error: Any = _NOTHING

    @property
    def has_error(self) -> bool:
        return self._error is not _NOTHING

    @property
    def error(self) -> Any:
        """The recorded error, or None when there is none."""
        return None if self._error is _NOTHING else self._error

    def record_error(self, error: Any) -> None:
        self._error = error


class LastValueReplay(_StickyError, ReplayPolicy[T]):
    """Holds the latest value and replays it, followed by a sticky error."""

    def __init__(self, initial: T) -> None:
        self.last = initial

    def record_next(self, value: T) -> None:
        self.last = value

    def replay(self, observer: Observer) -> None:
        observer.next(self.last)
        if self.has_error:
            observer.error(self._error)


class BoundedReplay(_StickyError, ReplayPolicy[T]):
    """
    Remembers the ``size`` latest values, evicting the oldest first.

    Replays them in publication order, then the sticky error if one was
    recorded, otherwise the sticky completion if one was recorded.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError(f"Replay size must be >= 0, got {size}")
        self.size = size
        self._memory: Deque[T] = deque(maxlen=size)
        self.completed = False

    @property
    def memory(self) -> Tuple[T, ...]:
        return tuple(self._memory)

    def record_next(self, value: T) -> None:
        self._memory.append(value)

    def record_complete(self) -> None:
        self.completed = True

    def replay(self, observer: Observer) -> None:
        for value in tuple(self._memory):
            observer.next(value)
        if self.has_error:
            observer.error(self._error)
        elif self.completed:
            observer.complete()


# ============================================================================
# Delivery policies
# ============================================================================


class DeliveryPolicy(ABC):
    """
    Decides when a published value is handed to the broadcast function.

    Subclasses must implement:
    - ``deliver(value, broadcast)``
    """

    @abstractmethod
    def deliver(self, value: Any, broadcast: Broadcast) -> None:
        pass

    def flush(self) -> None:
        """Hand over any value still waiting. Called before terminal events."""
        pass


class ImmediateDelivery(DeliveryPolicy):
    """Broadcast inside the publishing call."""

    def deliver(self, value: Any, broadcast: Broadcast) -> None:
        broadcast(value)


class IdleCoalescingDelivery(DeliveryPolicy):
    """
    Broadcast on the host's next idle period, latest value only.

    At most one delivery is pending: each new value cancels the pending
    callback and schedules a fresh one, so a burst of values collapses into a
    single broadcast of the last of them.

    Args:
        scheduler: Host idle-callback facility.
        timeout_ms: Worst-case delay passed with every request.
    """

    def __init__(self, scheduler: IdleScheduler, timeout_ms: Optional[int] = None):
        self.scheduler = scheduler
        self.timeout_ms = timeout_ms
        self._handle: Optional[Hashable] = None
        self._pending: Any = _NOTHING
        self._broadcast: Optional[Broadcast] = None

    @property
    def is_pending(self) -> bool:
        return self._handle is not None

    def deliver(self, value: Any, broadcast: Broadcast) -> None:
        if self._handle is not None:
            logger.debug("Coalescing idle delivery, cancelling %r", self._handle)
            self.scheduler.cancel_idle_callback(self._handle)

        self._pending = value
        self._broadcast = broadcast
        self._handle = self.scheduler.request_idle_callback(
            self._on_idle, timeout_ms=self.timeout_ms
        )

    def flush(self) -> None:
        if self._handle is None:
            return
        self.scheduler.cancel_idle_callback(self._handle)
        self._on_idle()

    def _on_idle(self) -> None:
        value, broadcast = self._pending, self._broadcast
        self._handle = None
        self._pending = _NOTHING
        self._broadcast = None
        if broadcast is not None:
            broadcast(value)
