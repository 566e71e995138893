"""
Playstream Observable Package
=============================

The cold side of playstream: Observable, Observer, Subscription and the
combinators that build derived Observables.
"""

from .combinators import SourceKind, all_, chain, complete, from_, of
from .core import Observable, Observer, Subscription, to_observer

__all__ = [
    "Observable",
    "Observer",
    "Subscription",
    "SourceKind",
    "to_observer",
    "of",
    "from_",
    "complete",
    "chain",
    "all_",
]
