"""
Command handlers for different CLI modes.
"""

from .browse_handler import BrowseHandler
from .favorites_handler import FavoritesHandler
from .playback_handler import PlaybackHandler

__all__ = ['BrowseHandler', 'FavoritesHandler', 'PlaybackHandler']
