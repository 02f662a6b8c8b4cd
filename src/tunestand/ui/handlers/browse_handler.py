"""
Browse handler: listing, searching and inspecting the catalog.
"""

from .base_handler import BaseHandler
from ...core.validation import validate_user_input
from ...utils.string_utils import normalize_string


class BrowseHandler(BaseHandler):
    """Handler for read-only catalog commands."""
    
    def handle_songs(self):
        tracks = self.library_service.latest_tracks()
        self.display_manager.display_tracks(tracks, "Latest songs", self.liked_ids())
        return tracks
    
    def handle_search(self, query: str):
        if normalize_string(query):
            query = validate_user_input("query", query)
        tracks = self.library_service.tracks_by_title()
        results = self.library_service.search(query, tracks)
        if normalize_string(query):
            heading = f'Results for "{query.strip()}"'
        else:
            heading = "All songs"
        self.display_manager.display_tracks(results, heading, self.liked_ids())
        genres = self.library_service.genres(tracks)
        if genres:
            self.display_manager.print_info(f"Genres: {', '.join(genres)}")
        return results
    
    def handle_albums(self):
        overview = self.library_service.overview()
        self.display_manager.display_overview(overview)
        return overview
    
    def handle_album(self, album_id: str):
        album, tracks = self.library_service.album_tracks(album_id)
        self.display_manager.display_album(album, tracks, self.liked_ids())
        return album, tracks
    
    def handle_song(self, track_id: str):
        track, related = self.library_service.track_detail(track_id)
        self.display_manager.display_track_detail(
            track, related, self.library_service.share_text(track)
        )
        return track
