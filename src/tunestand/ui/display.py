"""
Display management for the Tunestand CLI with Rich components.
"""

from typing import Iterable, List, Optional
from rich.console import Console

from ..models.track import Track, Album
from ..models.session import SessionSnapshot
from ..services.library_service import LibraryOverview
from .formatters import DisplayFormatters


class DisplayManager:
    """Manages display formatting for catalog listings and the player using Rich."""
    
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.formatters = DisplayFormatters(self.console)
    
    def display_tracks(self, tracks: List[Track], heading: str, liked_ids: Optional[Iterable[str]] = None):
        self.formatters.display_tracks(tracks, heading, liked_ids)
    
    def display_overview(self, overview: LibraryOverview):
        self.formatters.display_overview(overview)
    
    def display_album(self, album: Album, tracks: List[Track], liked_ids: Optional[Iterable[str]] = None):
        self.formatters.display_album(album, tracks, liked_ids)
    
    def display_track_detail(self, track: Track, related: List[Track], share_text: str):
        self.formatters.display_track_detail(track, related, share_text)
    
    def display_player(self, snapshot: SessionSnapshot, liked_ids: Optional[Iterable[str]] = None):
        self.formatters.display_player(snapshot, liked_ids)
    
    def print_success(self, message: str):
        self.console.print(f"[bold green]✓[/bold green] {message}")
    
    def print_info(self, message: str):
        self.console.print(f"[dim blue]ℹ[/dim blue] [dim]{message}[/dim]")
    
    def print_warning(self, message: str):
        self.console.print(f"[yellow]⚠[/yellow] {message}")
    
    def print_error(self, message: str):
        self.console.print(f"[bold red]✗[/bold red] {message}")
