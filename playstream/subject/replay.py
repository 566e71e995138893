"""
Playstream ReplaySubject - Bounded History for Late Subscribers
===============================================================

A ReplaySubject remembers its ``memory_size`` latest values and its terminal
state. A new observer first receives the remembered values in publication
order, then the error or completion if one happened.

Example:
    ```python
    from playstream import ReplaySubject

    history = ReplaySubject(2)
    history.next(1)
    history.next(2)
    history.next(3)
    history.subscribe(print)  # 2, 3
    ```
"""

from typing import Any, Optional, Tuple, TypeVar

from .policies import BoundedReplay, DeliveryPolicy
from .subject import Subject

T = TypeVar("T")


class ReplaySubject(Subject[T]):
    """
    Subject replaying a bounded FIFO history and a sticky terminal state.

    Args:
        memory_size: Number of latest values replayed; 0 replays only the
            terminal state.
        delivery: When values are broadcast. Defaults to ImmediateDelivery.

    Raises:
        ValueError: If ``memory_size`` is negative.
    """

    def __init__(
        self, memory_size: int, delivery: Optional[DeliveryPolicy] = None
    ) -> None:
        self._history: BoundedReplay[T] = BoundedReplay(memory_size)
        super().__init__(replay=self._history, delivery=delivery)

    @property
    def memory_size(self) -> int:
        return self._history.size

    @property
    def memory(self) -> Tuple[T, ...]:
        """Remembered values, oldest first."""
        return self._history.memory

    @property
    def error_value(self) -> Any:
        """The sticky error, or None."""
        return self._history.error

    def has_error(self) -> bool:
        return self._history.has_error

    def is_complete(self) -> bool:
        return self._history.completed
