"""
Base handler class for command handlers.
"""

from ...services.library_service import LibraryService
from ...services.favorites_service import FavoritesService
from ...services.playback_session import PlaybackSession
from ...ui.display import DisplayManager


class BaseHandler:
    """Base class for command handlers."""
    
    def __init__(
        self,
        library_service: LibraryService,
        favorites_service: FavoritesService,
        session: PlaybackSession,
        display_manager: DisplayManager
    ):
        self.library_service = library_service
        self.favorites_service = favorites_service
        self.session = session
        self.display_manager = display_manager
    
    def liked_ids(self):
        """Liked track ids for the signed-in user, empty when signed out."""
        if not self.favorites_service.user:
            return []
        return self.favorites_service.liked_track_ids
