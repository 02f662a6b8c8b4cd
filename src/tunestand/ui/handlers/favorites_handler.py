"""
Favorites handler: listing and toggling liked tracks.
"""

from .base_handler import BaseHandler
from ...core.config import ERROR_MESSAGES
from ...core.exceptions import AuthenticationError


class FavoritesHandler(BaseHandler):
    """Handler for commands that need a signed-in user."""
    
    def _require_user(self):
        if not self.favorites_service.user:
            raise AuthenticationError(ERROR_MESSAGES["LOGIN_REQUIRED"])
    
    def handle_list(self):
        self._require_user()
        tracks = self.favorites_service.liked_tracks()
        if not tracks:
            self.display_manager.print_info("You have not liked any songs yet.")
            return tracks
        self.display_manager.display_tracks(tracks, "Favorites", self.liked_ids())
        return tracks
    
    def handle_toggle(self, track_id: str) -> bool:
        self._require_user()
        track = self.library_service.get_track(track_id)
        liked = self.favorites_service.toggle_like(track.id)
        if liked:
            self.display_manager.print_success(f"Added [white]{track.title}[/white] to favorites")
        else:
            self.display_manager.print_success(f"Removed [white]{track.title}[/white] from favorites")
        return liked
