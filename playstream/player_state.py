"""
Playstream PlayerState - Shared Streams of the Music Player
===========================================================

The player, the navigation bar and the song browser all react to the same
few streams: which song is playing, whether audio is running, the playback
position and what the user types in the search box. PlayerState owns those
streams. It is built once where the application is assembled and handed to
each component that needs it.

Example:
    ```python
    state = create_player_state(AsyncioIdleScheduler())
    state.playing_song.subscribe(player.play)
    state.search_queries().subscribe(browser.show_results)
    state.select("song-42")
    ```
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .observable.core.observable import Observable
from .scheduling import IdleScheduler
from .subject import BehaviorSubject, IdleSubject, Subject

# Shorter search terms clear the results instead of querying
SEARCH_MIN_LENGTH = 3

NO_SONG = ""


@dataclass
class PlayerState:
    """
    Streams shared by the player user interface.

    Attributes:
        scheduler: Host idle facility used by ``time_update``.
        playing_song: Id of the song being played, ``NO_SONG`` when idle.
        playing: True while audio plays, False while paused.
        volume: Volume changes, 0.0 to 1.0.
        time_update: Playback position in seconds, coalesced to idle periods.
        search_terms: Raw text of the search box on every input.
    """

    scheduler: IdleScheduler
    playing_song: BehaviorSubject[str] = field(
        default_factory=lambda: BehaviorSubject(NO_SONG)
    )
    playing: Subject[bool] = field(default_factory=Subject)
    volume: Subject[float] = field(default_factory=Subject)
    search_terms: Subject[str] = field(default_factory=Subject)
    time_update: Optional[IdleSubject[float]] = None

    def __post_init__(self) -> None:
        if self.time_update is None:
            self.time_update = IdleSubject(self.scheduler)

    def select(self, song_id: str) -> None:
        """Make ``song_id`` the playing song."""
        self.playing_song.next(song_id)

    def current_song(self) -> Optional[str]:
        """Id of the playing song, or None when nothing was selected."""
        song_id = self.playing_song.get()
        return None if song_id == NO_SONG else song_id

    def is_selected(self, song_id: str) -> Observable[bool]:
        """Whether ``song_id`` is the playing song, now and on every change."""
        return Observable.chain(
            self.playing_song, lambda current, _: current == song_id
        )

    def search_queries(self) -> Observable[Optional[str]]:
        """
        Search terms worth sending to the server.

        Terms shorter than ``SEARCH_MIN_LENGTH`` (after trimming) map to None,
        meaning the result list should be cleared.
        """

        def to_query(term: str, _fail: Callable[[Any], None]) -> Optional[str]:
            term = term.strip()
            return term if len(term) >= SEARCH_MIN_LENGTH else None

        return Observable.chain(self.search_terms, to_query)


def create_player_state(scheduler: IdleScheduler) -> PlayerState:
    """Build the single PlayerState of an application."""
    return PlayerState(scheduler=scheduler)
