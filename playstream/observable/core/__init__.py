"""
Playstream Observable Core
==========================

Observer normalization, Subscription lifecycle and the cold Observable.
"""

from .observable import Observable
from .observer import Observer, noop, to_observer
from .subscription import SubscriberFunction, Subscription

__all__ = [
    "Observable",
    "Observer",
    "SubscriberFunction",
    "Subscription",
    "noop",
    "to_observer",
]
