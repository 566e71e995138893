"""
Playstream Observer - Handler Bundle for One Subscription
=========================================================

An Observer groups the four handlers a producer may call:

- ``start(subscription)`` - called once, before the producer runs
- ``next(value)`` - one emitted value
- ``error(err)`` - terminal failure
- ``complete()`` - terminal success

Any handler that is not supplied is a no-op. ``to_observer`` accepts the
shapes callers actually pass to ``subscribe`` and normalizes them.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, Mapping, Optional, TypeVar

if TYPE_CHECKING:
    from .subscription import Subscription

T = TypeVar("T")

HANDLER_NAMES = ("start", "next", "error", "complete")


def noop(*args: Any) -> None:
    pass


@dataclass(eq=False)
class Observer(Generic[T]):
    """
    Handlers for one subscription.

    Compared by identity: two observers with the same handlers are still
    distinct registrations.
    """

    start: Callable[["Subscription"], None] = noop
    next: Callable[[T], None] = noop
    error: Callable[[Any], None] = noop
    complete: Callable[[], None] = noop


def to_observer(
    observer: Any = None,
    error: Optional[Callable[[Any], None]] = None,
    complete: Optional[Callable[[], None]] = None,
) -> Observer:
    """
    Build an Observer from the arguments given to ``subscribe``.

    Args:
        observer: A callable used as the ``next`` handler, an Observer, a
            mapping with any of the keys start/next/error/complete, any object
            exposing those attributes, or None.
        error: Error handler, used only when ``observer`` is a callable or None.
        complete: Completion handler, used only when ``observer`` is a
            callable or None.

    Returns:
        A fresh Observer with no-ops for every missing handler.

    Example:
        ```python
        to_observer(print)                      # next=print
        to_observer({"next": print})            # same
        to_observer(print, error=log_failure)   # next and error
        ```
    """
    if observer is None or callable(observer):
        return Observer(
            next=observer if observer is not None else noop,
            error=error if error is not None else noop,
            complete=complete if complete is not None else noop,
        )

    if isinstance(observer, Mapping):
        handlers = {name: observer.get(name) for name in HANDLER_NAMES}
    else:
        handlers = {name: getattr(observer, name, None) for name in HANDLER_NAMES}

    return Observer(
        **{name: fn if fn is not None else noop for name, fn in handlers.items()}
    )
