"""
Playstream Observable - Cold, Lazily Re-executed Producer
=========================================================

An Observable wraps a subscriber function. Nothing happens until
``subscribe`` is called, and every call runs the subscriber function again
for the new observer: no history is shared between subscribers.

The static combinators (``of``, ``from_``, ``complete``, ``chain``, ``all``)
are implemented in ``playstream.observable.combinators`` and exposed here as
static methods.

Example:
    ```python
    from playstream import Observable

    def produce(observer):
        observer.next(1)
        observer.next(2)
        observer.complete()
        return lambda: print("torn down")

    numbers = Observable(produce)
    numbers.subscribe(print)  # 1, 2
    numbers.subscribe(print)  # 1, 2 again: the producer re-runs
    ```
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Optional,
    TypeVar,
)

from .observer import to_observer
from .subscription import SubscriberFunction, Subscription

if TYPE_CHECKING:
    from ..combinators import SourceKind

T = TypeVar("T")
U = TypeVar("U")


class Observable(Generic[T]):
    """A cold push producer built from a subscriber function."""

    def __init__(self, subscriber: SubscriberFunction) -> None:
        self._subscriber = subscriber

    def subscribe(
        self,
        observer: Any = None,
        error: Optional[Callable[[Any], None]] = None,
        complete: Optional[Callable[[], None]] = None,
    ) -> Subscription:
        """
        Run the producer for a new observer.

        Args:
            observer: ``next`` handler, Observer, mapping or handler object.
            error: Error handler when ``observer`` is a plain callable.
            complete: Completion handler when ``observer`` is a plain callable.

        Returns:
            The Subscription controlling this run.
        """
        return Subscription(to_observer(observer, error, complete), self._subscriber)

    def observable(self) -> "Observable[T]":
        """Return self; the conversion hook used by ``Observable.from_``."""
        return self

    # Combinators use dynamic imports to avoid a circular dependency with
    # the combinators module, which constructs Observables.

    @staticmethod
    def of(*items: U) -> "Observable[U]":
        """Emit ``items`` in order, then complete."""
        from ..combinators import of

        return of(*items)

    @staticmethod
    def from_(source: Any, kind: Optional["SourceKind"] = None) -> "Observable":
        """Convert an observable-like object or a finite sequence."""
        from ..combinators import from_

        return from_(source, kind)

    @staticmethod
    def complete(*value: Any) -> "Observable":
        """Emit ``value`` when given, then complete."""
        from ..combinators import complete

        return complete(*value)

    @staticmethod
    def chain(
        source: "Observable[U]", fn: Callable[[U, Callable[[Any], None]], Any]
    ) -> "Observable":
        """Map every value of ``source`` through ``fn``."""
        from ..combinators import chain

        return chain(source, fn)

    @staticmethod
    def all(sources: Iterable["Observable"]) -> "Observable[List[Any]]":
        """Combine the latest values of every source."""
        from ..combinators import all_

        return all_(sources)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._subscriber!r})"
