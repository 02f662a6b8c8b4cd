"""
Data models for Tunestand.
"""

from .track import Track, Album
from .session import PlaybackStatus, TrackEndAction, SessionSnapshot
from .user import UserSession

__all__ = [
    'Track',
    'Album',
    'PlaybackStatus',
    'TrackEndAction',
    'SessionSnapshot',
    'UserSession',
]
