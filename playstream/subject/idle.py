"""
Playstream IdleSubject - Coalesced Delivery on Host Idle Periods
================================================================

An IdleSubject does not broadcast inside ``next``. It asks the host scheduler
for an idle callback and broadcasts then. Values published while a callback
is pending replace each other, so observers receive only the last value of a
burst. Use it for high-rate sources such as playback position, where only the
latest value matters.

Errors and completion are broadcast immediately, after handing any pending
value to the observers, and are replayed to late observers like a
ReplaySubject with no value memory.

Example:
    ```python
    from playstream import IdleSubject
    from playstream.scheduling import ManualIdleScheduler

    host = ManualIdleScheduler()
    position = IdleSubject(host)
    position.subscribe(print)
    position.next(1.0)
    position.next(1.5)
    position.next(2.0)
    host.run_idle()  # 2.0, once
    ```
"""

from typing import Optional, TypeVar

from ..config import CONFIG
from ..scheduling import IdleScheduler
from .policies import IdleCoalescingDelivery
from .replay import ReplaySubject

T = TypeVar("T")


class IdleSubject(ReplaySubject[T]):
    """
    ReplaySubject(0) whose values are delivered on the host's idle periods.

    Args:
        scheduler: Host idle-callback facility.
        timeout_ms: Worst-case delivery delay handed to the scheduler.
            Defaults to ``CONFIG.idle_timeout_ms``.
    """

    def __init__(
        self, scheduler: IdleScheduler, timeout_ms: Optional[int] = None
    ) -> None:
        if timeout_ms is None:
            timeout_ms = CONFIG.idle_timeout_ms
        self._idle = IdleCoalescingDelivery(scheduler, timeout_ms)
        super().__init__(0, delivery=self._idle)

    @property
    def scheduler(self) -> IdleScheduler:
        return self._idle.scheduler

    @property
    def timeout_ms(self) -> Optional[int]:
        return self._idle.timeout_ms

    @property
    def delivery_pending(self) -> bool:
        """True while a coalesced value waits for the next idle period."""
        return self._idle.is_pending
