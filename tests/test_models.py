"""
Tests for catalog and session models.
"""

import dataclasses
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tunestand.models import Track, Album, SessionSnapshot, PlaybackStatus, UserSession


class TestTrack:
    """Tests for Track model."""
    
    def test_from_row(self, sample_track_row):
        """Test building a track from a backend row."""
        track = Track.from_row(sample_track_row)
        
        assert track.id == sample_track_row["id"]
        assert track.title == "Night Drive"
        assert track.artist == "Test Artist"
        assert track.duration == 215
        assert track.play_count == 42
        assert track.album_id == "a1"
        assert track.release_year == 2021
        assert track.is_published is True
    
    def test_from_row_minimal(self):
        """Test missing columns fall back to defaults."""
        track = Track.from_row({"id": 7, "title": None, "play_count": None})
        
        assert track.id == "7"
        assert track.title == "Unknown Title"
        assert track.artist == "Unknown Artist"
        assert track.audio_url == ""
        assert track.play_count == 0
        assert track.duration is None
    
    def test_from_row_ignores_unknown_columns(self, sample_track_row):
        row = dict(sample_track_row, waveform="...", extra=1)
        
        track = Track.from_row(row)
        
        assert not hasattr(track, "waveform")
    
    def test_from_row_coerces_numbers(self):
        track = Track.from_row({"id": "x", "duration": "181", "release_year": "1850"})
        
        assert track.duration == 181
        assert track.release_year is None
    
    def test_from_row_bad_duration(self):
        track = Track.from_row({"id": "x", "duration": "three minutes"})
        
        assert track.duration is None
    
    def test_from_row_without_id(self):
        with pytest.raises(ValueError):
            Track.from_row({"title": "No id"})
    
    def test_track_is_immutable(self, s1):
        """Test that tracks are read-only snapshots."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            s1.play_count = 99
    
    def test_to_dict(self, sample_track_row):
        data = Track.from_row(sample_track_row).to_dict()
        
        assert data["title"] == "Night Drive"
        assert data["lyrics"] == sample_track_row["lyrics"]


class TestAlbum:
    """Tests for Album model."""
    
    def test_from_row(self):
        album = Album.from_row({"id": 3, "title": "Roads", "release_year": 2021, "description": "Debut"})
        
        assert album.id == "3"
        assert album.title == "Roads"
        assert album.release_year == 2021
        assert album.description == "Debut"
    
    def test_from_row_defaults(self):
        album = Album.from_row({"id": "a"})
        
        assert album.title == "Untitled"
        assert album.release_year is None
    
    def test_from_row_without_id(self):
        with pytest.raises(ValueError):
            Album.from_row({"title": "Roads"})


class TestSessionModels:
    """Tests for session and user models."""
    
    def test_snapshot_is_immutable(self, s1):
        snapshot = SessionSnapshot(
            current_track=s1,
            queue=(s1,),
            current_index=0,
            is_playing=True,
            repeat=False,
            shuffle=False,
            position=0.0,
            has_next=False,
            has_previous=False,
            status=PlaybackStatus.PLAYING,
        )
        
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.is_playing = False
    
    def test_user_session(self):
        user = UserSession(user_id="u1", access_token="token")
        
        assert user.email is None
        assert user.refresh_token is None
