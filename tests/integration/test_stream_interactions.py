"""Integration tests combining subjects, combinators and schedulers."""

import asyncio

import pytest

from playstream import (
    BehaviorSubject,
    IdleSubject,
    Observable,
    ReplaySubject,
    SourceKind,
    Subject,
)


@pytest.mark.integration
def test_all_over_behavior_subjects_emits_immediately():
    """Sources that replay on subscribe fill every slot at once"""
    song = BehaviorSubject("intro")
    volume = BehaviorSubject(0.5)
    received = []

    Observable.all([song, volume]).subscribe(received.append)
    volume.next(0.75)

    assert received == [["intro", 0.5], ["intro", 0.75]]


@pytest.mark.integration
def test_all_with_completed_replay_source(recorder):
    """A replayed completion counts toward the combined completion"""
    finished = ReplaySubject(1)
    finished.next("done")
    finished.complete()
    live = Subject()
    observer = recorder()

    Observable.all([finished, live]).subscribe(observer)
    live.next(1)
    live.complete()

    assert observer.events == [("next", ["done", 1]), ("complete",)]


@pytest.mark.integration
def test_chain_over_idle_subject_maps_coalesced_values(idle_host):
    """Mapping an idle subject maps only the delivered values"""
    position = IdleSubject(idle_host)
    labels = []

    Observable.chain(position, lambda seconds, fail: f"{seconds:.1f}s").subscribe(
        labels.append
    )
    position.next(1.0)
    position.next(2.0)
    idle_host.run_idle()

    assert labels == ["2.0s"]


@pytest.mark.integration
def test_from_observable_like_subject_stays_hot():
    """Converting a subject keeps it hot: late subscribers miss earlier values"""
    subject = Subject()
    source = Observable.from_(subject, SourceKind.OBSERVABLE_LIKE)
    early, late = [], []

    source.subscribe(early.append)
    subject.next(1)
    source.subscribe(late.append)
    subject.next(2)

    assert early == [1, 2]
    assert late == [2]


@pytest.mark.integration
def test_behavior_subject_bridge_from_search_results():
    """A hot result stream becomes a readable BehaviorSubject"""

    async def scenario():
        results = Subject()
        waiting = asyncio.ensure_future(BehaviorSubject.from_subject(results))
        await asyncio.sleep(0)
        results.next(["song-1"])
        latest = await waiting
        results.next(["song-1", "song-2"])
        return latest.get()

    assert asyncio.run(scenario()) == ["song-1", "song-2"]


@pytest.mark.integration
def test_subscriber_cleanup_runs_for_custom_observable():
    """A producer's teardown runs when its consumer unsubscribes"""
    ticks = Subject()
    torn_down = []

    def every_other(observer):
        count = 0

        def on_tick(value):
            nonlocal count
            count += 1
            if count % 2:
                observer.next(value)

        inner = ticks.subscribe(on_tick)

        def cleanup():
            inner.unsubscribe()
            torn_down.append(True)

        return cleanup

    received = []
    subscription = Observable(every_other).subscribe(received.append)
    for tick in range(5):
        ticks.next(tick)
    subscription.unsubscribe()
    ticks.next(99)

    assert received == [0, 2, 4]
    assert torn_down == [True]
    assert ticks.observer_count == 0
