"""
Pytest configuration and shared fixtures.
"""

import json
import pytest
import sys
import threading
from pathlib import Path
from unittest.mock import Mock, MagicMock, patch

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tunestand.core.exceptions import NotFoundError, RpcUnavailableError


def make_track(track_id, title=None, **kwargs):
    """Build a Track with sensible defaults."""
    from tunestand.models.track import Track
    return Track(
        id=track_id,
        title=title or f"Song {track_id}",
        artist=kwargs.pop("artist", "Test Artist"),
        audio_url=kwargs.pop("audio_url", f"https://cdn.example.com/{track_id}.mp3"),
        **kwargs
    )


def make_response(status_code=200, json_data=None, text=None):
    """Build a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    if json_data is not None:
        body = json.dumps(json_data)
        response.json = Mock(return_value=json_data)
    else:
        body = text or ""
        response.json = Mock(side_effect=ValueError("No JSON"))
    response.text = body
    response.content = body.encode()
    return response


class FakePlayCountStore:
    """In-memory stand-in for the catalog's play-count operations."""
    
    play_count_rpc = "increment_play_count"
    
    def __init__(self, counts=None, rpc_available=True, rpc_error=None):
        self.counts = dict(counts or {})
        self.rpc_available = rpc_available
        self.rpc_error = rpc_error
        self.calls = []
        self.lock = threading.Lock()
    
    def increment_play_count(self, track_id):
        self.calls.append(("rpc", track_id))
        if self.rpc_error is not None:
            raise self.rpc_error
        if not self.rpc_available:
            raise RpcUnavailableError("function missing", 404)
        with self.lock:
            self.counts[track_id] = self.counts.get(track_id, 0) + 1
    
    def get_play_count(self, track_id):
        self.calls.append(("get", track_id))
        if track_id not in self.counts:
            raise NotFoundError(f"Track {track_id} not found", 404)
        return self.counts[track_id]
    
    def set_play_count(self, track_id, play_count):
        self.calls.append(("set", track_id, play_count))
        self.counts[track_id] = play_count
    
    def has_rpc(self, name):
        return self.rpc_available


@pytest.fixture
def s1():
    return make_track("s1", "First Light", duration=200)


@pytest.fixture
def s2():
    return make_track("s2", "Second Wind", duration=180)


@pytest.fixture
def s3():
    return make_track("s3", "Third Time", duration=240)


@pytest.fixture
def sample_tracks(s1, s2, s3):
    return [s1, s2, s3]


@pytest.fixture
def play_count_store():
    return FakePlayCountStore(counts={"s1": 10, "s2": 5, "s3": 0})


@pytest.fixture
def mock_http_session():
    """Mock requests.Session for catalog client testing."""
    session = MagicMock()
    session.headers = {}
    session.request = Mock(return_value=make_response(200, []))
    return session


@pytest.fixture
def catalog_client(mock_http_session):
    """Catalog client wired to a mocked HTTP session."""
    from tunestand.clients.catalog import CatalogClient
    return CatalogClient(
        base_url="https://backend.example.com",
        api_key="anon-key",
        timeout=5,
        session=mock_http_session
    )


@pytest.fixture
def mock_catalog():
    """Mock catalog client."""
    catalog = Mock()
    catalog.user = None
    catalog.play_count_rpc = "increment_play_count"
    catalog.list_tracks = Mock(return_value=[])
    catalog.list_albums = Mock(return_value=[])
    catalog.get_tracks_by_ids = Mock(return_value=[])
    catalog.get_liked_track_ids = Mock(return_value=[])
    return catalog


@pytest.fixture
def no_retry_sleep():
    """Skip backoff sleeps in retried calls."""
    with patch('tunestand.utils.retry.time.sleep') as mock_sleep:
        yield mock_sleep


@pytest.fixture
def sample_track_row():
    """A songs row as returned by the backend."""
    return {
        "id": "b7e1c1a2-0000-4000-8000-000000000001",
        "title": "Night Drive",
        "artist": "Test Artist",
        "album": "Roads",
        "album_id": "a1",
        "duration": 215,
        "lyrics": "city lights and empty streets",
        "cover_image_url": "https://cdn.example.com/roads.jpg",
        "audio_url": "https://cdn.example.com/night-drive.mp3",
        "genre": "Synthpop",
        "release_year": 2021,
        "play_count": 42,
        "is_published": True,
        "created_at": "2024-03-01T10:00:00Z",
        "updated_at": "2024-03-02T10:00:00Z",
    }
