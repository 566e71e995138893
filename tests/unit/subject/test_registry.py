"""Unit tests for ObserverRegistry."""

import pytest

from playstream import Observer
from playstream.subject import ObserverRegistry


@pytest.mark.unit
@pytest.mark.subject
def test_registry_broadcasts_in_insertion_order():
    """Observers are notified in the order they were added"""
    registry = ObserverRegistry()
    order = []
    registry.add(Observer(next=lambda v: order.append(("a", v))))
    registry.add(Observer(next=lambda v: order.append(("b", v))))

    registry.broadcast_next(1)

    assert order == [("a", 1), ("b", 1)]


@pytest.mark.unit
@pytest.mark.subject
def test_registry_broadcasts_terminal_notifications():
    """Error and complete reach the matching handlers"""
    registry = ObserverRegistry()
    events = []
    registry.add(
        Observer(error=events.append, complete=lambda: events.append("complete"))
    )

    registry.broadcast_error("e")
    registry.broadcast_complete()

    assert events == ["e", "complete"]


@pytest.mark.unit
@pytest.mark.subject
def test_registry_removes_by_identity():
    """remove() detaches exactly the given observer"""
    registry = ObserverRegistry()
    first, second = Observer(), Observer()
    registry.add(first)
    registry.add(second)

    registry.remove(first)

    assert len(registry) == 1
    assert first not in registry
    assert second in registry


@pytest.mark.unit
@pytest.mark.subject
def test_registry_remove_unknown_observer_is_noop():
    """Removing an observer that was never added does nothing"""
    registry = ObserverRegistry()
    registry.add(Observer())

    registry.remove(Observer())

    assert len(registry) == 1


@pytest.mark.unit
@pytest.mark.subject
def test_registry_iteration_is_a_snapshot():
    """Mutating the registry while iterating does not affect the iteration"""
    registry = ObserverRegistry()
    observers = [Observer(), Observer()]
    for observer in observers:
        registry.add(observer)

    seen = []
    for observer in registry:
        registry.remove(observer)
        seen.append(observer)

    assert seen == observers
    assert len(registry) == 0
