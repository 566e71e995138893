"""
Playstream - Reactive Streams for the Music Player
==================================================

A small push-based stream library: cold Observables with combinators, and hot
multicast Subjects with replay and idle-coalesced delivery.
"""

import logging

from .config import CONFIG, StreamConfig, reset_config
from .exceptions import (
    PlaystreamError,
    SourceCompletedError,
    StreamError,
    SubjectTerminatedError,
)
from .observable import Observable, Observer, SourceKind, Subscription
from .player_state import PlayerState, create_player_state
from .scheduling import AsyncioIdleScheduler, IdleScheduler, ManualIdleScheduler
from .subject import BehaviorSubject, IdleSubject, ReplaySubject, Subject

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Cold producers
    "Observable",
    "Observer",
    "Subscription",
    "SourceKind",
    # Hot producers
    "Subject",
    "BehaviorSubject",
    "ReplaySubject",
    "IdleSubject",
    # Host scheduling
    "IdleScheduler",
    "AsyncioIdleScheduler",
    "ManualIdleScheduler",
    # Application state
    "PlayerState",
    "create_player_state",
    # Configuration
    "CONFIG",
    "StreamConfig",
    "reset_config",
    # Exceptions
    "PlaystreamError",
    "StreamError",
    "SubjectTerminatedError",
    "SourceCompletedError",
]
