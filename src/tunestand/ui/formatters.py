"""
Display Formatters Module
Handles formatting and displaying of tracks, albums and the player.
"""

from typing import Iterable, List, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from rich.align import Align
from rich import box

from ..models.track import Track, Album
from ..models.session import SessionSnapshot, PlaybackStatus
from ..services.library_service import LibraryOverview
from ..core.config import DEFAULTS, ERROR_MESSAGES, UI_CONFIG
from ..utils.string_utils import format_duration


class DisplayFormatters:
    """Formatters for catalog listings and player state."""

    def __init__(self, console: Console):
        self.console = console

    def create_header_panel(self, title: str, subtitle: Optional[str] = None) -> Panel:
        """Create a styled header panel."""
        header_text = Text(title, style="bold cyan")
        if subtitle:
            header_text.append(f"\n{subtitle}", style="dim")
        return Panel(
            Align.center(header_text),
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2)
        )

    @staticmethod
    def format_duration(seconds: Optional[float]) -> str:
        return format_duration(seconds) or DEFAULTS["DURATION"]

    def build_track_table(self, tracks: List[Track], liked_ids: Optional[Iterable[str]] = None,
                          highlight_index: Optional[int] = None) -> Table:
        """Build a table of tracks; the highlighted row is marked as now playing."""
        liked = set(liked_ids or [])
        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.ROUNDED,
            border_style="blue"
        )

        table.add_column("#", style="bold white", width=4, justify="right")
        table.add_column("Title", style="white", no_wrap=False)
        table.add_column("Artist", style="green")
        table.add_column("Album", style="yellow")
        table.add_column("Time", style="cyan", justify="center")
        table.add_column("Plays", style="magenta", justify="right")
        table.add_column("ID", style="dim")

        for i, track in enumerate(tracks):
            title = Text(track.title)
            if track.id in liked:
                title.append(" ♥", style="bold red")
            number = str(i + 1)
            if highlight_index is not None and i == highlight_index:
                number = "▶"
                title.stylize("bold green")
            table.add_row(
                number,
                title,
                track.artist,
                track.album or Text(DEFAULTS["ALBUM"], style="dim"),
                self.format_duration(track.duration),
                str(track.play_count),
                track.id
            )
        return table

    def display_tracks(self, tracks: List[Track], heading: str, liked_ids: Optional[Iterable[str]] = None):
        """Display a list of tracks under a header panel."""
        if not tracks:
            self.console.print(f"[bold red]✗[/bold red] {ERROR_MESSAGES['NO_RESULTS']}")
            return

        self.console.print()
        self.console.print(self.create_header_panel(
            f"🎵 {heading.upper()}",
            f"{len(tracks)} track{'s' if len(tracks) != 1 else ''}"
        ))
        limit = UI_CONFIG["MAX_DISPLAY_RESULTS"]
        self.console.print(self.build_track_table(tracks[:limit], liked_ids))
        if len(tracks) > limit:
            self.console.print(f"[dim]... and {len(tracks) - limit} more[/dim]")
        self.console.print()

    def display_overview(self, overview: LibraryOverview):
        """Display albums with their track counts, then the singles count."""
        if not overview.albums and not overview.singles:
            self.console.print("[bold red]✗[/bold red] The catalog is empty.")
            return

        self.console.print()
        self.console.print(self.create_header_panel("💿 ALBUMS"))

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.ROUNDED,
            border_style="blue"
        )
        table.add_column("#", style="bold white", width=4, justify="right")
        table.add_column("Album", style="yellow")
        table.add_column("Year", style="cyan", justify="center")
        table.add_column("Tracks", style="magenta", justify="right")
        table.add_column("ID", style="dim")

        for i, group in enumerate(overview.albums, 1):
            album = group.album
            table.add_row(
                str(i),
                album.title,
                str(album.release_year) if album.release_year else "—",
                str(len(group.tracks)),
                album.id
            )
        self.console.print(table)

        if overview.singles:
            self.console.print(
                f"[dim blue]ℹ[/dim blue] [dim]{len(overview.singles)} "
                f"single{'s' if len(overview.singles) != 1 else ''} without an album[/dim]"
            )
        self.console.print()

    def display_album(self, album: Album, tracks: List[Track], liked_ids: Optional[Iterable[str]] = None):
        """Display an album header and its track listing."""
        header_content = f"[bold yellow]{album.title}[/bold yellow]"
        if album.release_year:
            header_content += f"\n[cyan]Released: {album.release_year}[/cyan]"
        if album.description:
            header_content += f"\n[dim]{album.description}[/dim]"
        header_content += f"\n[magenta]{len(tracks)} track{'s' if len(tracks) != 1 else ''}[/magenta]"

        self.console.print()
        self.console.print(Panel(
            header_content,
            title="[bold cyan]💿 ALBUM[/bold cyan]",
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2)
        ))
        if tracks:
            self.console.print(self.build_track_table(tracks, liked_ids))
        else:
            self.console.print("[yellow]⚠[/yellow] This album has no published tracks yet.")
        self.console.print()

    def display_track_detail(self, track: Track, related: List[Track], share_text: str):
        """Display a single track, its lyrics, and related tracks."""
        details = f"[bold white]{track.title}[/bold white]\n[green]{track.artist}[/green]"
        if track.album:
            details += f"\n[yellow]{track.album}[/yellow]"
        meta = []
        if track.genre:
            meta.append(track.genre)
        if track.release_year:
            meta.append(str(track.release_year))
        meta.append(self.format_duration(track.duration))
        meta.append(f"{track.play_count} plays")
        details += f"\n[cyan]{' • '.join(meta)}[/cyan]"

        self.console.print()
        self.console.print(Panel(
            details,
            title="[bold cyan]🎵 SONG[/bold cyan]",
            border_style="cyan",
            box=box.ROUNDED,
            padding=(1, 2)
        ))
        if track.lyrics:
            self.console.print(Panel(track.lyrics, title="Lyrics", border_style="dim", box=box.SIMPLE))
        self.console.print(Panel(share_text, title="Share", border_style="green", box=box.ROUNDED))
        if related:
            self.console.print("[bold]Related songs[/bold]")
            self.console.print(self.build_track_table(related))
        self.console.print()

    def build_now_playing(self, snapshot: SessionSnapshot, liked: bool = False) -> Panel:
        """Build the player panel for the current session state."""
        track = snapshot.current_track
        if snapshot.status is PlaybackStatus.IDLE or track is None:
            return Panel("[dim]Nothing playing[/dim]", title="Player", border_style="dim", box=box.ROUNDED)

        state_icon = "▶ Playing" if snapshot.is_playing else "⏸ Paused"
        body = Text()
        body.append(f"{track.title}", style="bold white")
        if liked:
            body.append(" ♥", style="bold red")
        body.append(f"\n{track.artist}", style="green")
        body.append(
            f"\n{self.format_duration(snapshot.position)} / {self.format_duration(track.duration)}",
            style="cyan"
        )
        if snapshot.queue:
            body.append(f"\nTrack {snapshot.current_index + 1} of {len(snapshot.queue)}", style="dim")

        flags = []
        flags.append("[bold green]repeat[/bold green]" if snapshot.repeat else "[dim]repeat[/dim]")
        flags.append("[bold green]shuffle[/bold green]" if snapshot.shuffle else "[dim]shuffle[/dim]")
        flags.append("[white]prev[/white]" if snapshot.has_previous else "[dim]prev[/dim]")
        flags.append("[white]next[/white]" if snapshot.has_next else "[dim]next[/dim]")

        return Panel(
            body,
            title=f"[bold cyan]{state_icon}[/bold cyan]",
            subtitle="  ".join(flags),
            border_style="green" if snapshot.is_playing else "yellow",
            box=box.ROUNDED,
            padding=(1, 2)
        )

    def display_player(self, snapshot: SessionSnapshot, liked_ids: Optional[Iterable[str]] = None):
        """Display the player panel and the queue."""
        liked = set(liked_ids or [])
        current = snapshot.current_track
        self.console.print()
        self.console.print(self.build_now_playing(snapshot, liked=bool(current and current.id in liked)))
        if snapshot.queue:
            index = snapshot.current_index
            # The index can point away from the current track after a play without a list
            in_queue = current is not None and 0 <= index < len(snapshot.queue) and snapshot.queue[index].id == current.id
            self.console.print(self.build_track_table(
                list(snapshot.queue),
                liked,
                highlight_index=index if in_queue else None
            ))
