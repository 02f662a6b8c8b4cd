"""
Playback handler: an interactive transport loop over the playback session.

The terminal stands in for the media element: it renders the session, forwards
key commands to it, and reports the end of a track with the "e" command.
"""

from typing import Callable, List, Optional

from rich.prompt import Prompt

from .base_handler import BaseHandler
from ...clients.catalog import CatalogClient
from ...models.track import Track
from ...models.session import TrackEndAction
from ...services.play_counter import DeferredPlayCounter
from ...core.config import PLAYBACK_CONFIG, ERROR_MESSAGES
from ...core.exceptions import CatalogError, AuthenticationError
from ...core.logger import get_logger

logger = get_logger("ui.playback")

HELP_TEXT = (
    "[cyan]n[/cyan] next  [cyan]p[/cyan] previous  [cyan]t[/cyan] play/pause  "
    "[cyan]f[/cyan]/[cyan]b[/cyan] seek ±{step}s  [cyan]r[/cyan] repeat  [cyan]s[/cyan] shuffle  "
    "[cyan]e[/cyan] end of track  [cyan]l[/cyan] like  [cyan]1-N[/cyan] jump  [red]q[/red] quit"
)


class PlaybackHandler(BaseHandler):
    """Handler for the interactive player."""

    def __init__(self, *args, catalog: Optional[CatalogClient] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.catalog = catalog
        self.seek_step = PLAYBACK_CONFIG["SEEK_STEP"]

    def build_queue(
        self,
        album_id: Optional[str] = None,
        query: Optional[str] = None,
        favorites: bool = False
    ) -> List[Track]:
        """Pick the tracks the player will step through, the way each screen does."""
        if album_id:
            _, tracks = self.library_service.album_tracks(album_id)
            return tracks
        if favorites:
            if not self.favorites_service.user:
                raise AuthenticationError(ERROR_MESSAGES["LOGIN_REQUIRED"])
            return self.favorites_service.liked_tracks()
        if query:
            return self.library_service.search(query)
        return self.library_service.latest_tracks()

    def prepare_counter(self):
        """Install a play counter whose strategy probe runs with the first recorded play."""
        if self.session.play_counter is None and self.catalog is not None:
            self.session.play_counter = DeferredPlayCounter(self.catalog)

    def start(
        self,
        track_id: Optional[str] = None,
        album_id: Optional[str] = None,
        query: Optional[str] = None,
        favorites: bool = False
    ) -> bool:
        """
        Load a queue and play its first track (or the requested one).

        Returns:
            True if something is playing
        """
        tracks = self.build_queue(album_id=album_id, query=query, favorites=favorites)

        if track_id:
            track = next((t for t in tracks if t.id == track_id), None)
            if track is None:
                track = self.library_service.get_track(track_id)
        elif tracks:
            track = tracks[0]
        else:
            self.display_manager.print_error("Nothing to play.")
            return False

        self.prepare_counter()
        self.session.play_track(track, tracks)
        return True

    def execute(self, command: str) -> bool:
        """
        Apply one transport command to the session.

        Returns:
            False when the user asked to quit, True otherwise
        """
        command = command.strip().lower()
        session = self.session

        if command in ("q", "quit", "exit"):
            return False
        if command in ("n", "next"):
            if not session.has_next:
                self.display_manager.print_warning("Already at the last track.")
            session.play_next()
        elif command in ("p", "prev", "previous"):
            if not session.has_previous:
                self.display_manager.print_warning("Already at the first track.")
            session.play_previous()
        elif command in ("t", "", "pause", "play"):
            session.toggle_play_pause()
        elif command in ("f", "forward"):
            session.seek(session.position + self.seek_step)
        elif command in ("b", "back"):
            session.seek(session.position - self.seek_step)
        elif command in ("r", "repeat"):
            session.toggle_repeat()
        elif command in ("s", "shuffle"):
            session.toggle_shuffle()
        elif command in ("e", "end"):
            action = session.track_ended()
            if action is TrackEndAction.STOP:
                self.display_manager.print_info("End of queue.")
            elif action is TrackEndAction.RESTART:
                self.display_manager.print_info("Repeating track.")
        elif command in ("l", "like"):
            self._toggle_like()
        elif command.isdigit():
            self._jump(int(command))
        elif command in ("h", "help", "?"):
            self.display_manager.console.print(HELP_TEXT.format(step=self.seek_step))
        else:
            self.display_manager.print_error(f"Unknown command: {command}")
        return True

    def _jump(self, number: int):
        queue = self.session.queue
        if not 1 <= number <= len(queue):
            self.display_manager.print_error(f"Please enter a number between 1 and {len(queue)}")
            return
        self.session.play_at(number - 1)

    def _toggle_like(self):
        track = self.session.current_track
        if track is None:
            return
        if not self.favorites_service.user:
            self.display_manager.print_warning("Sign in with --email and --password to like songs.")
            return
        try:
            liked = self.favorites_service.toggle_like(track.id)
        except CatalogError as e:
            self.display_manager.print_error(f"Could not update favorites: {e}")
            return
        self.display_manager.print_success("Liked" if liked else "Unliked")

    def handle(
        self,
        track_id: Optional[str] = None,
        album_id: Optional[str] = None,
        query: Optional[str] = None,
        favorites: bool = False,
        ask: Callable[..., str] = Prompt.ask
    ):
        """Run the interactive player until the user quits."""
        if not self.start(track_id=track_id, album_id=album_id, query=query, favorites=favorites):
            return
        self.display_manager.console.print(HELP_TEXT.format(step=self.seek_step))
        while True:
            self.display_manager.display_player(self.session.snapshot(), self.liked_ids())
            command = ask("[bold]Command[/bold]", default="t")
            if not self.execute(command):
                break
        logger.debug("Player closed")
