"""
Playstream Subject Package
==========================

The hot side of playstream: subjects assembled from an ObserverRegistry, a
replay policy and a delivery policy.

Classes:
- Subject: no replay, immediate delivery
- BehaviorSubject: replays the latest value
- ReplaySubject: replays a bounded history and the terminal state
- IdleSubject: coalesces values and delivers them on host idle periods
"""

from .behavior import BehaviorSubject
from .idle import IdleSubject
from .policies import (
    BoundedReplay,
    DeliveryPolicy,
    IdleCoalescingDelivery,
    ImmediateDelivery,
    LastValueReplay,
    NoReplay,
    ReplayPolicy,
)
from .registry import ObserverRegistry
from .replay import ReplaySubject
from .subject import Subject

__all__ = [
    "Subject",
    "BehaviorSubject",
    "ReplaySubject",
    "IdleSubject",
    "ObserverRegistry",
    "ReplayPolicy",
    "NoReplay",
    "LastValueReplay",
    "BoundedReplay",
    "DeliveryPolicy",
    "ImmediateDelivery",
    "IdleCoalescingDelivery",
]
