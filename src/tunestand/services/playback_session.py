"""
Playback session: what is playing, in what order, and how transport controls move through it.

One session is created at application start and handed to every surface that
reads or drives playback. All operations are plain in-memory updates that never
raise; the only I/O is the play-count update, which is handed to a dispatcher
and never awaited.
"""

import concurrent.futures
import functools
from typing import Callable, Iterable, List, Optional, Tuple

from ..models.track import Track
from ..models.session import PlaybackStatus, TrackEndAction, SessionSnapshot
from ..core.config import PLAYBACK_CONFIG
from ..core.logger import get_logger
from .play_counter import PlayCounter

logger = get_logger("services.playback_session")

Dispatcher = Callable[[Callable[[], object]], object]
Listener = Callable[[SessionSnapshot], None]


class BackgroundDispatcher:
    """Runs fire-and-forget jobs on a small thread pool."""

    def __init__(self, max_workers: Optional[int] = None):
        self.executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers or PLAYBACK_CONFIG["COUNTER_WORKERS"],
            thread_name_prefix="tunestand-playcount"
        )

    def __call__(self, job: Callable[[], object]) -> concurrent.futures.Future:
        return self.executor.submit(job)

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)


class PlaybackSession:
    """Holds the current track, the queue it came from, and the transport flags."""

    def __init__(
        self,
        play_counter: Optional[PlayCounter] = None,
        dispatcher: Optional[Dispatcher] = None
    ):
        self.play_counter = play_counter
        self.dispatcher = dispatcher
        self._current_track: Optional[Track] = None
        self._queue: List[Track] = []
        self._current_index = 0
        self._is_playing = False
        self._repeat = False
        self._shuffle = False
        self._position = 0.0
        self._listeners: List[Listener] = []

    # Read-only state

    @property
    def current_track(self) -> Optional[Track]:
        return self._current_track

    @property
    def queue(self) -> Tuple[Track, ...]:
        return tuple(self._queue)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def repeat(self) -> bool:
        return self._repeat

    @property
    def shuffle(self) -> bool:
        return self._shuffle

    @property
    def position(self) -> float:
        return self._position

    @property
    def has_next(self) -> bool:
        return self._current_index < len(self._queue) - 1

    @property
    def has_previous(self) -> bool:
        return self._current_index > 0

    @property
    def status(self) -> PlaybackStatus:
        if self._current_track is None:
            return PlaybackStatus.IDLE
        return PlaybackStatus.PLAYING if self._is_playing else PlaybackStatus.LOADED

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            current_track=self._current_track,
            queue=self.queue,
            current_index=self._current_index,
            is_playing=self._is_playing,
            repeat=self._repeat,
            shuffle=self._shuffle,
            position=self._position,
            has_next=self.has_next,
            has_previous=self.has_previous,
            status=self.status,
        )

    # Transport

    def play_track(self, track: Track, tracks: Optional[Iterable[Track]] = None) -> None:
        """
        Start playing a track, optionally replacing the queue.

        With a list, the queue becomes that list and the index points at the
        first entry with the same id, or 0 if the track is not in it. Without a
        list, the index moves to the track's position in the existing queue if
        it is there and stays where it was otherwise, so the index and the
        current track can disagree after this call.

        Every call records a play in the background.
        """
        if tracks is not None:
            self._queue = list(tracks)
            self._current_index = self._index_of(track.id, default=0)
        elif self._queue:
            self._current_index = self._index_of(track.id, default=self._current_index)

        self._current_track = track
        self._is_playing = True
        self._position = 0.0
        logger.debug(f"Playing {track.id} at index {self._current_index} of {len(self._queue)}")

        self._record_play(track.id)
        self._notify()

    def play_at(self, index: int) -> None:
        """
        Play the queue entry at ``index`` without replacing the queue.

        Unlike play_track, the index is taken as given, so the second of two
        entries with the same id can be chosen. Out-of-range indexes are ignored.
        """
        if not 0 <= index < len(self._queue):
            return
        track = self._queue[index]
        self._current_index = index
        self._current_track = track
        self._is_playing = True
        self._position = 0.0
        logger.debug(f"Playing {track.id} at index {index} of {len(self._queue)}")

        self._record_play(track.id)
        self._notify()

    def play_next(self) -> None:
        """Advance one track; no-op on the last track. Leaves the playing flag alone."""
        if not self.has_next:
            return
        self._current_index += 1
        self._current_track = self._queue[self._current_index]
        self._position = 0.0
        self._notify()

    def play_previous(self) -> None:
        """Go back one track; no-op on the first track. Leaves the playing flag alone."""
        if not self.has_previous:
            return
        self._current_index -= 1
        self._current_track = self._queue[self._current_index]
        self._position = 0.0
        self._notify()

    def toggle_play_pause(self) -> None:
        self._is_playing = not self._is_playing
        self._notify()

    def set_playing(self, playing: bool) -> None:
        self._is_playing = bool(playing)
        self._notify()

    def toggle_repeat(self) -> None:
        self._repeat = not self._repeat
        self._notify()

    def toggle_shuffle(self) -> None:
        # Display flag only; the queue order is never changed.
        self._shuffle = not self._shuffle
        self._notify()

    def seek(self, seconds: float) -> None:
        """Move the playback position, clamped to the track's duration hint when known."""
        if self._current_track is None:
            return
        position = max(0.0, float(seconds))
        duration = self._current_track.duration
        if duration is not None and duration > 0:
            position = min(position, float(duration))
        self._position = position
        self._notify()

    def track_ended(self) -> TrackEndAction:
        """
        Handle the media element reporting the end of the current track.

        Returns:
            RESTART when repeat is on, ADVANCE when there is a next track,
            STOP otherwise (playing flag cleared), NONE when idle
        """
        if self._current_track is None:
            return TrackEndAction.NONE
        if self._repeat:
            self._position = 0.0
            self._notify()
            return TrackEndAction.RESTART
        if self.has_next:
            self.play_next()
            return TrackEndAction.ADVANCE
        self.set_playing(False)
        return TrackEndAction.STOP

    # Listeners

    def add_listener(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # Internals

    def _index_of(self, track_id: str, default: int) -> int:
        for index, queued in enumerate(self._queue):
            if queued.id == track_id:
                return index
        return default

    def _record_play(self, track_id: str) -> None:
        if self.play_counter is None:
            return
        job = functools.partial(self.play_counter.record_play, track_id)
        try:
            if self.dispatcher is None:
                job()
            else:
                self.dispatcher(job)
        except Exception as e:
            # A dispatcher that refuses work (e.g. after shutdown) must not break playback
            logger.warning(f"Could not schedule play count for {track_id}: {e}")

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Error in playback listener: {e}")
