"""
Playstream Exceptions
=====================

Exception types raised by the stream core.

Errors travelling *through* a stream are plain values handed to
``observer.error``; these classes only appear when such a value has to be
raised in Python (``BehaviorSubject.get()``, ``BehaviorSubject.from_subject``)
or when a subject is misused.
"""

from typing import Any


class PlaystreamError(Exception):
    """Base class for every exception raised by playstream."""

    pass


class StreamError(PlaystreamError):
    """Wraps an error value that is not itself an exception."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Stream failed with {value!r}")
        self.value = value


class SubjectTerminatedError(PlaystreamError):
    """Raised in strict mode when a terminated subject is published to."""

    pass


class SourceCompletedError(PlaystreamError):
    """Raised when a source completes before producing a required value."""

    pass


def as_exception(error: Any) -> BaseException:
    """Return ``error`` when it can be raised, otherwise wrap it in StreamError."""
    if isinstance(error, BaseException):
        return error
    return StreamError(error)
