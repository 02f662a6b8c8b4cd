"""
Favorites service: the signed-in user's liked tracks.
"""

from typing import List, Optional, Set

from ..clients.catalog import CatalogClient
from ..models.track import Track
from ..models.user import UserSession
from ..core.logger import get_logger
from ..utils.retry import retry_with_backoff

logger = get_logger("services.favorites")


class FavoritesService:
    """Keeps the set of liked track ids in step with the backend's likes table."""
    
    def __init__(self, catalog: Optional[CatalogClient] = None):
        self.catalog = catalog or CatalogClient()
        self._liked: Set[str] = set()
    
    @property
    def user(self) -> Optional[UserSession]:
        return self.catalog.user
    
    @property
    def liked_track_ids(self) -> List[str]:
        return sorted(self._liked)
    
    def sign_in(self, email: str, password: str) -> UserSession:
        """Sign in and load the user's likes."""
        user = self.catalog.sign_in(email, password)
        self.refresh()
        return user
    
    def sign_out(self) -> None:
        self.catalog.sign_out()
        self._liked.clear()
    
    @retry_with_backoff()
    def refresh(self) -> List[str]:
        """Reload liked ids from the backend."""
        user = self.catalog.require_user()
        self._liked = set(self.catalog.get_liked_track_ids(user.user_id))
        return self.liked_track_ids
    
    def is_liked(self, track_id: str) -> bool:
        return str(track_id) in self._liked
    
    def toggle_like(self, track_id: str) -> bool:
        """
        Like a track, or unlike it if it is already liked.
        
        Returns:
            True if the track is liked after the call
            
        Raises:
            AuthenticationError: No user is signed in
        """
        user = self.catalog.require_user()
        track_id = str(track_id)
        if track_id in self._liked:
            self.catalog.remove_like(user.user_id, track_id)
            self._liked.discard(track_id)
            logger.info(f"Removed {track_id} from favorites")
            return False
        self.catalog.add_like(user.user_id, track_id)
        self._liked.add(track_id)
        logger.info(f"Added {track_id} to favorites")
        return True
    
    @retry_with_backoff()
    def liked_tracks(self) -> List[Track]:
        """Published tracks the user has liked."""
        if not self._liked:
            return []
        return self.catalog.get_tracks_by_ids(self._liked)
