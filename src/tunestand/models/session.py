"""
Playback session value types.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .track import Track


class PlaybackStatus(Enum):
    """Coarse state of the playback session."""
    IDLE = "idle"        # nothing loaded
    LOADED = "loaded"    # track loaded, paused
    PLAYING = "playing"


class TrackEndAction(Enum):
    """What the session did in response to the end of a track."""
    NONE = "none"
    RESTART = "restart"  # repeat is on; the surface should rewind and keep playing
    ADVANCE = "advance"
    STOP = "stop"


@dataclass(frozen=True)
class SessionSnapshot:
    """Immutable view of the playback session at one point in time."""
    current_track: Optional[Track]
    queue: Tuple[Track, ...]
    current_index: int
    is_playing: bool
    repeat: bool
    shuffle: bool
    position: float
    has_next: bool
    has_previous: bool
    status: PlaybackStatus
