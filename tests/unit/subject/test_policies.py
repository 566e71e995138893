"""Unit tests for replay and delivery policies."""

import pytest

from playstream import Observer
from playstream.subject import (
    BoundedReplay,
    IdleCoalescingDelivery,
    ImmediateDelivery,
    LastValueReplay,
    NoReplay,
    Subject,
)


def recording_observer(events):
    return Observer(
        next=lambda v: events.append(("next", v)),
        error=lambda e: events.append(("error", e)),
        complete=lambda: events.append(("complete",)),
    )


@pytest.mark.unit
@pytest.mark.subject
def test_no_replay_replays_nothing():
    """NoReplay ignores everything it records"""
    policy = NoReplay()
    events = []
    policy.record_next(1)
    policy.record_error("e")

    policy.replay(recording_observer(events))

    assert events == []


@pytest.mark.unit
@pytest.mark.subject
def test_last_value_replay_keeps_only_latest():
    """LastValueReplay overwrites its value on every record"""
    policy = LastValueReplay("initial")
    events = []
    policy.record_next("a")
    policy.record_next("b")

    policy.replay(recording_observer(events))

    assert events == [("next", "b")]
    assert not policy.has_error
    assert policy.error is None


@pytest.mark.unit
@pytest.mark.subject
def test_last_value_replay_error_can_be_none():
    """None is a valid error value and is still sticky"""
    policy = LastValueReplay(0)
    events = []
    policy.record_error(None)

    policy.replay(recording_observer(events))

    assert policy.has_error
    assert events == [("next", 0), ("error", None)]


@pytest.mark.unit
@pytest.mark.subject
def test_bounded_replay_evicts_oldest_first():
    """BoundedReplay keeps the newest values up to its size"""
    policy = BoundedReplay(3)
    for value in range(5):
        policy.record_next(value)

    assert policy.memory == (2, 3, 4)


@pytest.mark.unit
@pytest.mark.subject
def test_bounded_replay_error_wins_over_completion():
    """With both recorded, only the error is replayed"""
    policy = BoundedReplay(1)
    events = []
    policy.record_complete()
    policy.record_error("e")

    policy.replay(recording_observer(events))

    assert events == [("error", "e")]


@pytest.mark.unit
@pytest.mark.subject
def test_immediate_delivery_broadcasts_synchronously():
    """ImmediateDelivery calls broadcast inside deliver"""
    delivered = []

    ImmediateDelivery().deliver(1, delivered.append)

    assert delivered == [1]


@pytest.mark.unit
@pytest.mark.subject
def test_idle_delivery_flush_without_pending_is_noop(idle_host):
    """Flushing with nothing scheduled delivers nothing"""
    delivery = IdleCoalescingDelivery(idle_host)

    delivery.flush()

    assert not delivery.is_pending
    assert idle_host.pending == 0


@pytest.mark.unit
@pytest.mark.subject
def test_idle_delivery_flush_delivers_pending_now(idle_host):
    """flush() hands the pending value over and cancels the idle callback"""
    delivery = IdleCoalescingDelivery(idle_host)
    delivered = []
    delivery.deliver("late", delivered.append)

    delivery.flush()

    assert delivered == ["late"]
    assert idle_host.pending == 0


@pytest.mark.unit
@pytest.mark.subject
def test_subject_composes_custom_policies(idle_host):
    """A plain Subject accepts any replay and delivery combination"""
    subject = Subject(replay=BoundedReplay(2), delivery=IdleCoalescingDelivery(idle_host))
    subject.next(1)
    subject.next(2)
    received = []

    subject.subscribe(received.append)
    idle_host.run_idle()

    # replay of both values, then the single coalesced delivery of 2
    assert received == [1, 2, 2]
