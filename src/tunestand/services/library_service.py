"""
Library service for browsing, searching and grouping the catalog.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import quote

from ..clients.catalog import CatalogClient
from ..models.track import Track, Album
from ..core.config import SITE_CONFIG, CATALOG_CONFIG
from ..utils.retry import retry_with_backoff
from ..utils.string_utils import contains_normalized, normalize_string


@dataclass
class AlbumGroup:
    """An album with the published tracks that belong to it."""
    album: Album
    tracks: List[Track] = field(default_factory=list)


@dataclass
class LibraryOverview:
    """Albums with their tracks, plus tracks that belong to no album."""
    albums: List[AlbumGroup] = field(default_factory=list)
    singles: List[Track] = field(default_factory=list)


class LibraryService:
    """Service for read-only catalog operations."""

    def __init__(self, catalog: Optional[CatalogClient] = None):
        self.catalog = catalog or CatalogClient()

    @retry_with_backoff()
    def latest_tracks(self) -> List[Track]:
        """Published tracks, newest first."""
        return self.catalog.list_tracks(order="created_at.desc")

    @retry_with_backoff()
    def tracks_by_title(self) -> List[Track]:
        """Published tracks in title order."""
        return self.catalog.list_tracks(order="title.asc")

    @retry_with_backoff()
    def get_track(self, track_id: str) -> Track:
        return self.catalog.get_track(track_id)

    @retry_with_backoff()
    def related_tracks(self, track_id: str, limit: Optional[int] = None) -> List[Track]:
        return self.catalog.get_related_tracks(track_id, limit)

    @retry_with_backoff()
    def albums(self) -> List[Album]:
        return self.catalog.list_albums()

    def search(self, query: str, tracks: Optional[List[Track]] = None) -> List[Track]:
        """
        Match a query against title, artist, genre and lyrics, ignoring case and accents.

        Args:
            query: Search text; blank queries return every track
            tracks: Tracks to search; fetched in title order if not given

        Returns:
            Matching tracks in their original order
        """
        if tracks is None:
            tracks = self.tracks_by_title()
        if not normalize_string(query):
            return list(tracks)
        return [
            track for track in tracks
            if contains_normalized(track.title, query)
            or contains_normalized(track.artist, query)
            or contains_normalized(track.genre, query)
            or contains_normalized(track.lyrics, query)
        ]

    @staticmethod
    def genres(tracks: List[Track]) -> List[str]:
        """Distinct genres in first-seen order."""
        seen = []
        for track in tracks:
            if track.genre and track.genre not in seen:
                seen.append(track.genre)
        return seen

    @staticmethod
    def group_by_album(albums: List[Album], tracks: List[Track]) -> LibraryOverview:
        """
        Attach tracks to their albums by album id.

        Albums keep their given order and may be empty. Tracks whose album id
        matches no album, or that have none, are listed as singles.
        """
        groups = {album.id: AlbumGroup(album=album) for album in albums}
        overview = LibraryOverview(albums=list(groups.values()))
        for track in tracks:
            group = groups.get(track.album_id) if track.album_id else None
            if group is None:
                overview.singles.append(track)
            else:
                group.tracks.append(track)
        return overview

    def overview(self) -> LibraryOverview:
        return self.group_by_album(self.albums(), self.tracks_by_title())

    def album_tracks(self, album_id: str) -> Tuple[Album, List[Track]]:
        """An album and its tracks in title order."""
        album = self._get_album(album_id)
        tracks = [track for track in self.tracks_by_title() if track.album_id == album.id]
        return album, tracks

    @retry_with_backoff()
    def _get_album(self, album_id: str) -> Album:
        return self.catalog.get_album(album_id)

    def track_detail(self, track_id: str) -> Tuple[Track, List[Track]]:
        """A track and the related tracks shown next to it."""
        track = self.get_track(track_id)
        return track, self.related_tracks(track.id, CATALOG_CONFIG["RELATED_LIMIT"])

    @staticmethod
    def share_url(track_id: str) -> str:
        return f"{SITE_CONFIG['BASE_URL']}/song/{quote(str(track_id), safe='')}"

    @classmethod
    def share_text(cls, track: Track) -> str:
        """Message used when sharing a track, including its link."""
        return f"🎵 {track.title} - {track.artist}\n\n{cls.share_url(track.id)}"
