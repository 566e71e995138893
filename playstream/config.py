"""
Playstream Configuration
========================

Process-wide knobs for the stream core, held in a single mutable dataclass
instance. Components read ``CONFIG`` at call time, so changes apply to
existing subjects as well as new ones.

Example:
    ```python
    from playstream.config import CONFIG

    CONFIG.raise_on_terminated = True  # report misuse instead of ignoring it
    ```
"""

from dataclasses import dataclass, fields
from typing import Optional


@dataclass
class StreamConfig:
    """Stream core configuration parameters."""

    # Log and continue when an observer handler raises during a broadcast.
    # When False the exception propagates to the publisher and the remaining
    # observers of that broadcast are skipped.
    isolate_observer_errors: bool = True

    # Raise SubjectTerminatedError instead of logging when next/error/complete
    # is called on a subject that already errored or completed.
    raise_on_terminated: bool = False

    # Default worst-case delay handed to the idle scheduler by IdleSubject.
    idle_timeout_ms: Optional[int] = None


CONFIG = StreamConfig()


def reset_config() -> None:
    """Restore every field of ``CONFIG`` to its default."""
    defaults = StreamConfig()
    for f in fields(StreamConfig):
        setattr(CONFIG, f.name, getattr(defaults, f.name))
