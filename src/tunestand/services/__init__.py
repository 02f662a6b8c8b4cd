"""
Core services for Tunestand.
"""

from .play_counter import (
    PlayCounter,
    AtomicPlayCounter,
    ReadWritePlayCounter,
    FallbackPlayCounter,
    DeferredPlayCounter,
    select_play_counter,
)
from .playback_session import PlaybackSession, BackgroundDispatcher
from .library_service import LibraryService, AlbumGroup, LibraryOverview
from .favorites_service import FavoritesService

__all__ = [
    'PlayCounter',
    'AtomicPlayCounter',
    'ReadWritePlayCounter',
    'FallbackPlayCounter',
    'DeferredPlayCounter',
    'select_play_counter',
    'PlaybackSession',
    'BackgroundDispatcher',
    'LibraryService',
    'AlbumGroup',
    'LibraryOverview',
    'FavoritesService',
]
