"""
Playstream Combinators - Building Cold Observables From Other Sources
=====================================================================

Every combinator returns a new cold Observable. State that a combinator needs
(the value slots of ``all_``, the inner subscriptions of ``chain``) is created
inside the subscriber function, so each ``subscribe`` gets its own copy.

Combinators:
- ``of(*items)`` - emit items, then complete
- ``from_(source, kind)`` - convert an observable-like object or a sequence
- ``complete(value?)`` - emit an optional value, then complete
- ``chain(source, fn)`` - map values, forward error and completion
- ``all_(sources)`` - combine the latest value of every source
"""

import logging
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from .core.observable import Observable
from .core.observer import Observer

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

# Marks a value slot of all_() that has not received a value yet. None is a
# legitimate stream value, so it cannot serve as the marker.
_UNSET = object()


class SourceKind(Enum):
    """How ``from_`` should treat its source."""

    # The source exposes observable() returning an Observable
    OBSERVABLE_LIKE = "observable_like"
    # The source is a finite iterable emitted element by element
    SEQUENCE = "sequence"


def of(*items: T) -> Observable[T]:
    """
    Emit each item synchronously, in order, then complete.

    Example:
        ```python
        of(1, 2, 3).subscribe(print)  # 1, 2, 3
        ```
    """

    def subscriber(observer: Observer) -> None:
        for item in items:
            observer.next(item)
        observer.complete()

    return Observable(subscriber)


def from_(source: Any, kind: Optional[SourceKind] = None) -> Observable:
    """
    Convert ``source`` into an Observable.

    The caller states what the source is; nothing is inferred from it.

    Args:
        source: An object exposing ``observable()``, or a finite iterable.
        kind: ``SourceKind.OBSERVABLE_LIKE`` or ``SourceKind.SEQUENCE``
            (the default).

    Returns:
        The source's own Observable, or one emitting the sequence then
        completing. The sequence is iterated again on every subscribe.

    Raises:
        TypeError: If an observable-like source has no callable ``observable``.
    """
    kind = kind or SourceKind.SEQUENCE

    if kind is SourceKind.OBSERVABLE_LIKE:
        convert = getattr(source, "observable", None)
        if not callable(convert):
            raise TypeError(
                f"{type(source).__name__} does not expose an observable() conversion"
            )
        return convert()

    def subscriber(observer: Observer) -> None:
        for value in source:
            observer.next(value)
        observer.complete()

    return Observable(subscriber)


def complete(*value: Any) -> Observable:
    """
    Emit ``value`` if one is given, then complete.

    ``complete()`` only completes; ``complete(None)`` emits None first.
    """
    if len(value) > 1:
        raise TypeError(f"complete() takes at most 1 value ({len(value)} given)")

    def subscriber(observer: Observer) -> None:
        if value:
            observer.next(value[0])
        observer.complete()

    return Observable(subscriber)


def chain(
    source: Observable[T], fn: Callable[[T, Callable[[Any], None]], U]
) -> Observable[U]:
    """
    Apply ``fn`` to every value of ``source``.

    ``fn`` receives the value and the downstream error handler, so it can
    report a failure itself. Its return value is always emitted. Error and
    completion of ``source`` are forwarded unchanged.

    Example:
        ```python
        def parse(text, fail):
            if not text.isdigit():
                fail(ValueError(text))
            return text

        chain(lines, parse).subscribe(print, error=log_failure)
        ```
    """

    def subscriber(observer: Observer) -> Callable[[], None]:
        inner = source.subscribe(
            lambda value: observer.next(fn(value, observer.error)),
            observer.error,
            observer.complete,
        )
        return inner.unsubscribe

    return Observable(subscriber)


def all_(sources: Iterable[Observable]) -> Observable[List[Any]]:
    """
    Combine the latest value of every source into a list.

    Nothing is emitted until every source has produced at least one value;
    after that, every update emits the full list again. Completion is signalled
    once every source has completed. Any source error is forwarded as is.
    With no sources, the result completes immediately.

    Example:
        ```python
        a, b = Subject(), Subject()
        all_([a, b]).subscribe(print, complete=lambda: print("done"))
        a.next(12)       # nothing
        b.next("yolo")   # [12, 'yolo']
        b.complete()     # nothing
        a.next(42)       # [42, 'yolo']
        a.complete()     # done
        ```
    """
    sources = list(sources)

    def subscriber(observer: Observer) -> Callable[[], None]:
        values: List[Any] = [_UNSET] * len(sources)
        completed = [False] * len(sources)
        inner = []

        if not sources:
            observer.complete()

        def on_next(index: int, value: Any) -> None:
            values[index] = value
            if all(v is not _UNSET for v in values):
                observer.next(list(values))

        def on_complete(index: int) -> None:
            completed[index] = True
            if all(completed):
                observer.complete()

        for index, source in enumerate(sources):
            inner.append(
                source.subscribe(
                    lambda value, index=index: on_next(index, value),
                    observer.error,
                    lambda index=index: on_complete(index),
                )
            )

        def cleanup() -> None:
            logger.debug("Detaching all_() from %d sources", len(inner))
            for subscription in inner:
                subscription.unsubscribe()

        return cleanup

    return Observable(subscriber)
