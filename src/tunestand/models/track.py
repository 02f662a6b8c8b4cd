"""
Catalog models: tracks and albums as stored by the hosted backend.
"""

from dataclasses import dataclass, fields
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric value: {value!r}")
        return None


@dataclass(frozen=True)
class Track:
    """
    A published song, as a read-only snapshot of a `songs` row.
    
    Attributes:
        id: Stable unique identifier
        title: Song title
        artist: Artist name
        audio_url: Location of the audio file
        cover_image_url: Optional location of the cover image
        duration: Duration hint in seconds
        play_count: Number of plays recorded when the snapshot was taken
        album: Album name (denormalized)
        album_id: Album identifier, None for singles
    """
    id: str
    title: str
    artist: str
    audio_url: str
    cover_image_url: Optional[str] = None
    duration: Optional[int] = None
    play_count: int = 0
    album: Optional[str] = None
    album_id: Optional[str] = None
    lyrics: Optional[str] = None
    genre: Optional[str] = None
    release_year: Optional[int] = None
    is_published: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    
    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Track':
        """Build a track from a backend row, ignoring unknown columns."""
        # Import here to avoid circular imports
        from ..core.validation import validate_year
        from ..core.config import DEFAULTS
        
        if not row.get("id"):
            raise ValueError("Track row has no id")
        
        known = {f.name for f in fields(cls)}
        data = {key: value for key, value in row.items() if key in known}
        data["id"] = str(row["id"])
        data["title"] = row.get("title") or DEFAULTS["TITLE"]
        data["artist"] = row.get("artist") or DEFAULTS["ARTIST"]
        data["audio_url"] = row.get("audio_url") or ""
        data["duration"] = _optional_int(row.get("duration"))
        data["play_count"] = _optional_int(row.get("play_count")) or 0
        data["release_year"] = validate_year(_optional_int(row.get("release_year")))
        if data.get("album_id") is not None:
            data["album_id"] = str(data["album_id"])
        if "is_published" in row:
            data["is_published"] = bool(row["is_published"])
        return cls(**data)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert track to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class Album:
    """An album grouping of tracks."""
    id: str
    title: str
    cover_image_url: Optional[str] = None
    release_year: Optional[int] = None
    description: Optional[str] = None
    created_at: Optional[str] = None
    
    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Album':
        from ..core.validation import validate_year
        
        if not row.get("id"):
            raise ValueError("Album row has no id")
        
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "Untitled",
            cover_image_url=row.get("cover_image_url"),
            release_year=validate_year(_optional_int(row.get("release_year"))),
            description=row.get("description"),
            created_at=row.get("created_at"),
        )
