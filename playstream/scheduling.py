"""
Playstream Scheduling - Host Idle-Callback Facilities
=====================================================

IdleSubject does not decide when "idle" is; it asks a host scheduler. A host
scheduler exposes the two operations of the browser's idle-callback API:

- ``request_idle_callback(callback, timeout_ms=None)`` returns a handle
- ``cancel_idle_callback(handle)`` drops a callback that has not run yet

Two hosts are provided:

- ``AsyncioIdleScheduler`` runs callbacks on an asyncio event loop
- ``ManualIdleScheduler`` runs callbacks when ``run_idle()`` is called, for
  tests and hosts that drive their own main loop
"""

import asyncio
import logging
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Optional,
    Protocol,
    runtime_checkable,
)

logger = logging.getLogger(__name__)

IdleCallback = Callable[[], None]


@runtime_checkable
class IdleScheduler(Protocol):
    """Structural interface of a host idle-callback facility."""

    def request_idle_callback(
        self, callback: IdleCallback, timeout_ms: Optional[int] = None
    ) -> Hashable:
        """Schedule ``callback`` for the next idle period and return its handle."""
        ...

    def cancel_idle_callback(self, handle: Hashable) -> None:
        """Cancel a callback that has not run yet. Unknown handles are ignored."""
        ...


class AsyncioIdleScheduler:
    """
    Idle callbacks on an asyncio event loop.

    A callback runs after ``idle_delay`` seconds. When a request carries a
    ``timeout_ms`` shorter than that, the timeout wins, so it bounds the
    worst-case delay. With the default delay of 0 the callback runs on the
    next loop iteration, after the callbacks already queued.

    Args:
        loop: Event loop to schedule on. Defaults to the running loop at
            request time.
        idle_delay: Quiet period in seconds before a callback runs.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        idle_delay: float = 0.0,
    ) -> None:
        if idle_delay < 0:
            raise ValueError(f"idle_delay must be >= 0, got {idle_delay}")
        self._loop = loop
        self._idle_delay = idle_delay

    def request_idle_callback(
        self, callback: IdleCallback, timeout_ms: Optional[int] = None
    ) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        delay = self._idle_delay
        if timeout_ms is not None:
            delay = min(delay, timeout_ms / 1000)
        return loop.call_later(delay, callback)

    def cancel_idle_callback(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class ManualIdleScheduler:
    """
    Idle callbacks that run only when the host says it is idle.

    Handles are positive integers starting at 1, so 0 can mean "nothing
    scheduled" to callers that store handles.

    Example:
        ```python
        scheduler = ManualIdleScheduler()
        handle = scheduler.request_idle_callback(lambda: print("idle"))
        scheduler.pending   # 1
        scheduler.run_idle()  # prints "idle"
        ```
    """

    def __init__(self) -> None:
        self._callbacks: Dict[int, IdleCallback] = {}
        self._timeouts: Dict[int, Optional[int]] = {}
        self._next_handle = 1

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next idle period."""
        return len(self._callbacks)

    def timeout_of(self, handle: int) -> Optional[int]:
        """Timeout requested with ``handle``, or None."""
        return self._timeouts.get(handle)

    def request_idle_callback(
        self, callback: IdleCallback, timeout_ms: Optional[int] = None
    ) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        self._timeouts[handle] = timeout_ms
        return handle

    def cancel_idle_callback(self, handle: Any) -> None:
        self._callbacks.pop(handle, None)
        self._timeouts.pop(handle, None)

    def run_idle(self) -> int:
        """
        Run every callback scheduled before this call, in request order.

        Callbacks requested while running wait for the next ``run_idle``.

        Returns:
            Number of callbacks that ran.
        """
        ran = 0
        for handle in sorted(self._callbacks):
            callback = self._callbacks.pop(handle, None)
            self._timeouts.pop(handle, None)
            if callback is None:
                # cancelled by an earlier callback of this run
                continue
            logger.debug("Running idle callback %d", handle)
            callback()
            ran += 1
        return ran
