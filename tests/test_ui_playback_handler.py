"""
Tests for the interactive player handler.
"""

import io
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from rich.console import Console

from tunestand.ui.display import DisplayManager
from tunestand.ui.handlers import PlaybackHandler
from tunestand.services.playback_session import PlaybackSession
from tunestand.services.play_counter import FallbackPlayCounter, ReadWritePlayCounter, DeferredPlayCounter
from tunestand.core.exceptions import AuthenticationError
from tunestand.models.track import Album
from conftest import make_track


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=140, record=True)


@pytest.fixture
def library_service(sample_tracks):
    service = Mock()
    service.latest_tracks.return_value = sample_tracks
    service.search.return_value = sample_tracks[1:]
    service.album_tracks.return_value = (Album(id="a1", title="Roads"), sample_tracks[:2])
    return service


@pytest.fixture
def favorites_service(sample_tracks):
    service = Mock()
    service.user = None
    service.liked_track_ids = []
    service.liked_tracks.return_value = sample_tracks[2:]
    return service


@pytest.fixture
def session():
    return PlaybackSession(play_counter=Mock())


@pytest.fixture
def handler(library_service, favorites_service, session, console):
    return PlaybackHandler(
        library_service,
        favorites_service,
        session,
        DisplayManager(console)
    )


def output(console):
    return console.export_text()


class TestQueueBuilding:
    """Tests for choosing the queue."""
    
    def test_default_queue_is_latest_tracks(self, handler, sample_tracks):
        assert handler.build_queue() == sample_tracks
    
    def test_album_queue(self, handler, library_service, sample_tracks):
        assert handler.build_queue(album_id="a1") == sample_tracks[:2]
        library_service.album_tracks.assert_called_once_with("a1")
    
    def test_search_queue(self, handler, library_service):
        handler.build_queue(query="wind")
        
        library_service.search.assert_called_once_with("wind")
    
    def test_favorites_queue(self, handler, favorites_service, sample_tracks):
        favorites_service.user = Mock()
        
        assert handler.build_queue(favorites=True) == sample_tracks[2:]
    
    def test_favorites_queue_requires_sign_in(self, handler, favorites_service, session):
        """Test playing favorites while signed out asks for sign-in instead of playing nothing."""
        with pytest.raises(AuthenticationError, match="Sign in"):
            handler.start(favorites=True)
        
        favorites_service.liked_tracks.assert_not_called()
        assert session.current_track is None


class TestStart:
    """Tests for starting playback."""
    
    def test_start_plays_first_track(self, handler, session, s1, sample_tracks):
        """Test the first queued track plays when none is requested."""
        assert handler.start() is True
        
        assert session.current_track == s1
        assert session.queue == tuple(sample_tracks)
        assert session.is_playing is True
    
    def test_start_with_track_in_queue(self, handler, session, s3):
        handler.start(track_id="s3")
        
        assert session.current_track == s3
        assert session.current_index == 2
    
    def test_start_with_track_outside_queue(self, handler, session, library_service):
        """Test a track outside the queue is fetched and plays at index 0."""
        outsider = make_track("x9")
        library_service.get_track.return_value = outsider
        
        handler.start(track_id="x9")
        
        assert session.current_track == outsider
        assert session.current_index == 0
    
    def test_start_with_empty_queue(self, handler, session, library_service, console):
        library_service.latest_tracks.return_value = []
        
        assert handler.start() is False
        assert session.current_track is None
        assert "Nothing to play" in output(console)
    
    def test_counter_chosen_once_from_catalog(self, library_service, favorites_service, console, play_count_store):
        session = PlaybackSession()
        handler = PlaybackHandler(
            library_service, favorites_service, session, DisplayManager(console),
            catalog=play_count_store
        )
        
        handler.start()
        counter = session.play_counter
        handler.start()
        
        assert isinstance(counter, DeferredPlayCounter)
        assert isinstance(counter.strategy, FallbackPlayCounter)
        assert session.play_counter is counter
        assert play_count_store.counts["s1"] == 12
    
    def test_counter_without_backend_function(self, library_service, favorites_service, console, play_count_store):
        play_count_store.rpc_available = False
        session = PlaybackSession()
        handler = PlaybackHandler(
            library_service, favorites_service, session, DisplayManager(console),
            catalog=play_count_store
        )
        
        handler.start()
        
        assert isinstance(session.play_counter.strategy, ReadWritePlayCounter)
        assert play_count_store.counts["s1"] == 11
    
    def test_start_does_not_wait_for_capability_check(self, library_service, favorites_service, console,
                                                      play_count_store, s1):
        """Test the backend check runs with the queued play count, not before playback."""
        play_count_store.has_rpc = Mock(return_value=True)
        queued = []
        session = PlaybackSession(dispatcher=queued.append)
        handler = PlaybackHandler(
            library_service, favorites_service, session, DisplayManager(console),
            catalog=play_count_store
        )
        
        handler.start()
        
        assert session.current_track == s1
        assert session.is_playing is True
        play_count_store.has_rpc.assert_not_called()
        
        queued[0]()
        play_count_store.has_rpc.assert_called_once_with("increment_play_count")
        assert play_count_store.counts["s1"] == 11


class TestExecute:
    """Tests for transport commands."""
    
    def test_next_and_previous(self, handler, session, s1, s2):
        handler.start()
        
        assert handler.execute("n") is True
        assert session.current_track == s2
        handler.execute("p")
        assert session.current_track == s1
    
    def test_previous_at_start_warns(self, handler, session, console, s1):
        handler.start()
        
        handler.execute("p")
        
        assert session.current_track == s1
        assert "first track" in output(console)
    
    def test_toggle_play_pause(self, handler, session):
        handler.start()
        
        handler.execute("t")
        assert session.is_playing is False
        handler.execute("")
        assert session.is_playing is True
    
    def test_seek_forward_and_back(self, handler, session):
        handler.start()
        
        handler.execute("f")
        handler.execute("f")
        handler.execute("b")
        
        assert session.position == handler.seek_step
    
    def test_repeat_and_shuffle(self, handler, session, sample_tracks):
        handler.start()
        
        handler.execute("r")
        handler.execute("s")
        
        assert session.repeat is True
        assert session.shuffle is True
        assert session.queue == tuple(sample_tracks)
    
    def test_end_of_track_advances_then_stops(self, handler, session, console, s2, s3):
        handler.start(track_id="s2")
        
        handler.execute("e")
        assert session.current_track == s3
        handler.execute("e")
        
        assert session.is_playing is False
        assert "End of queue" in output(console)
    
    def test_jump(self, handler, session, s3):
        handler.start()
        
        handler.execute("3")
        
        assert session.current_track == s3
        assert session.current_index == 2
    
    def test_jump_to_second_copy_of_duplicate(self, handler, session, library_service, s1, s2):
        """Test jumping to a repeated track keeps the row the user picked."""
        library_service.latest_tracks.return_value = [s1, s2, s1]
        handler.start()
        
        handler.execute("3")
        
        assert session.current_index == 2
        assert session.current_track == s1
        assert session.has_next is False
    
    def test_jump_out_of_range(self, handler, session, console, s1):
        handler.start()
        
        handler.execute("9")
        
        assert session.current_track == s1
        assert "between 1 and 3" in output(console)
    
    def test_like_requires_sign_in(self, handler, favorites_service, console):
        handler.start()
        
        handler.execute("l")
        
        favorites_service.toggle_like.assert_not_called()
        assert "Sign in" in output(console)
    
    def test_like_current_track(self, handler, favorites_service, console, s1):
        favorites_service.user = Mock()
        favorites_service.toggle_like.return_value = True
        handler.start()
        
        handler.execute("l")
        
        favorites_service.toggle_like.assert_called_once_with(s1.id)
        assert "Liked" in output(console)
    
    def test_unknown_command(self, handler, console):
        handler.start()
        
        assert handler.execute("xyz") is True
        assert "Unknown command" in output(console)
    
    def test_quit(self, handler):
        assert handler.execute("q") is False


class TestHandleLoop:
    """Tests for the interactive loop."""
    
    def test_loop_renders_and_quits(self, handler, session, console, s2):
        """Test the loop applies commands until quit and renders the player."""
        commands = iter(["n", "q"])
        
        handler.handle(ask=lambda *args, **kwargs: next(commands))
        
        assert session.current_track == s2
        text = output(console)
        assert "Playing" in text
        assert "Second Wind" in text
    
    def test_loop_with_nothing_to_play(self, handler, library_service):
        library_service.latest_tracks.return_value = []
        ask = Mock()
        
        handler.handle(ask=ask)
        
        ask.assert_not_called()
