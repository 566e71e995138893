"""Integration tests for the player's shared stream state."""

import pytest

from playstream import BehaviorSubject, IdleSubject, create_player_state
from playstream.player_state import NO_SONG, SEARCH_MIN_LENGTH


@pytest.fixture
def state(idle_host):
    return create_player_state(idle_host)


@pytest.mark.integration
def test_player_state_owns_one_of_each_stream(state, idle_host):
    """The composition root builds every shared stream once"""
    assert isinstance(state.playing_song, BehaviorSubject)
    assert isinstance(state.time_update, IdleSubject)
    assert state.time_update.scheduler is idle_host
    assert state.playing_song.get() == NO_SONG
    assert state.current_song() is None


@pytest.mark.integration
def test_components_share_the_same_playing_song(state):
    """A selection made by one component reaches every other subscriber"""
    player_loads = []
    navbar_titles = []
    state.playing_song.subscribe(player_loads.append)
    state.playing_song.subscribe(navbar_titles.append)

    state.select("song-7")

    assert player_loads == [NO_SONG, "song-7"]
    assert navbar_titles == [NO_SONG, "song-7"]
    assert state.current_song() == "song-7"


@pytest.mark.integration
def test_is_selected_tracks_the_playing_song(state):
    """Each song row follows whether it is the one playing"""
    row_one, row_two = [], []
    state.is_selected("1").subscribe(row_one.append)
    state.is_selected("2").subscribe(row_two.append)

    state.select("1")
    state.select("2")

    assert row_one == [False, True, False]
    assert row_two == [False, False, True]


@pytest.mark.integration
def test_search_queries_drop_short_terms(state):
    """Terms shorter than the minimum clear results instead of querying"""
    queries = []
    state.search_queries().subscribe(queries.append)

    for term in ("b", "be", "bea", "beat ", "  "):
        state.search_terms.next(term)

    assert SEARCH_MIN_LENGTH == 3
    assert queries == [None, None, "bea", "beat", None]


@pytest.mark.integration
def test_time_updates_are_coalesced_per_idle_period(state, idle_host):
    """The progress bar redraws once per idle period with the latest position"""
    redraws = []
    state.time_update.subscribe(redraws.append)

    for position in (10.0, 10.25, 10.5):
        state.time_update.next(position)
    idle_host.run_idle()

    assert redraws == [10.5]


@pytest.mark.integration
def test_play_button_follows_playing_stream(state):
    """The play button label tracks the playing flag"""
    labels = []
    state.playing.subscribe(lambda playing: labels.append("pause" if playing else "play"))

    state.playing.next(True)
    state.playing.next(False)

    assert labels == ["pause", "play"]
