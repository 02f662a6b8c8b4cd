"""
Tunestand CLI Module
Command-line storefront: browse and search the catalog, manage favorites, and play.
"""

import argparse
import os
import sys
from typing import List, Optional

from ..clients.catalog import CatalogClient
from ..services.library_service import LibraryService
from ..services.favorites_service import FavoritesService
from ..services.playback_session import PlaybackSession, BackgroundDispatcher
from ..ui.display import DisplayManager
from ..ui.handlers import BrowseHandler, FavoritesHandler, PlaybackHandler
from ..core.config import PROJECT_NAME, PROJECT_VERSION, PROJECT_DESCRIPTION
from ..core.exceptions import TunestandError, AuthenticationError, NotFoundError
from ..core.validation import validate_user_input


class TunestandCLI:
    """Main CLI class for the Tunestand storefront."""

    def __init__(
        self,
        catalog: Optional[CatalogClient] = None,
        session: Optional[PlaybackSession] = None,
        display_manager: Optional[DisplayManager] = None
    ):
        """Initialize the CLI; the playback session is created once here and shared."""
        self.catalog = catalog or CatalogClient()
        self.dispatcher = None
        if session is None:
            self.dispatcher = BackgroundDispatcher()
            session = PlaybackSession(dispatcher=self.dispatcher)
        self.session = session
        self.library_service = LibraryService(self.catalog)
        self.favorites_service = FavoritesService(self.catalog)
        self.display_manager = display_manager or DisplayManager()

        handler_args = (
            self.library_service,
            self.favorites_service,
            self.session,
            self.display_manager
        )
        self.browse_handler = BrowseHandler(*handler_args)
        self.favorites_handler = FavoritesHandler(*handler_args)
        self.playback_handler = PlaybackHandler(*handler_args, catalog=self.catalog)

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog=PROJECT_NAME.lower(),
            description=f"{PROJECT_NAME} v{PROJECT_VERSION} - {PROJECT_DESCRIPTION}",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  %(prog)s songs
  %(prog)s search "summer"
  %(prog)s albums
  %(prog)s album <album-id>
  %(prog)s song <track-id>
  %(prog)s play --album <album-id>
  %(prog)s --email me@example.com --password secret favorites
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'{PROJECT_NAME} {PROJECT_VERSION}'
        )
        parser.add_argument(
            '--email',
            default=os.getenv("TUNESTAND_EMAIL"),
            help='Account email, needed for favorites (or TUNESTAND_EMAIL)'
        )
        parser.add_argument(
            '--password',
            default=os.getenv("TUNESTAND_PASSWORD"),
            help='Account password (or TUNESTAND_PASSWORD)'
        )

        subparsers = parser.add_subparsers(
            dest='mode',
            help='Available modes',
            required=True
        )

        subparsers.add_parser('songs', help='List the latest songs')

        search_parser = subparsers.add_parser('search', help='Search songs by title, artist, genre or lyrics')
        search_parser.add_argument('query', help='Search text')

        subparsers.add_parser('albums', help='List albums')

        album_parser = subparsers.add_parser('album', help='Show an album and its songs')
        album_parser.add_argument('album_id', help='Album ID')

        song_parser = subparsers.add_parser('song', help='Show a song, related songs and its share link')
        song_parser.add_argument('track_id', help='Song ID')

        play_parser = subparsers.add_parser('play', help='Start the interactive player')
        self._add_play_args(play_parser)

        subparsers.add_parser('favorites', help='List your liked songs')

        like_parser = subparsers.add_parser('like', help='Like or unlike a song')
        like_parser.add_argument('track_id', help='Song ID')

        return parser

    def _add_play_args(self, parser: argparse.ArgumentParser):
        """Add arguments for play mode."""
        source = parser.add_mutually_exclusive_group()
        source.add_argument(
            '--album', '-l',
            dest='album_id',
            help='Queue the songs of this album'
        )
        source.add_argument(
            '--search', '-s',
            dest='query',
            help='Queue the songs matching this search'
        )
        source.add_argument(
            '--favorites', '-f',
            action='store_true',
            help='Queue your liked songs'
        )
        parser.add_argument(
            '--track', '-t',
            dest='track_id',
            help='Song to start with (defaults to the first in the queue)'
        )

    def _sign_in(self, email: Optional[str], password: Optional[str]):
        if not email or not password:
            return
        email = validate_user_input("email", email)
        user = self.favorites_service.sign_in(email, password)
        self.display_manager.print_info(f"Signed in as {user.email}")

    def dispatch(self, parsed_args: argparse.Namespace):
        """Run the handler for a parsed command."""
        self._sign_in(parsed_args.email, parsed_args.password)

        mode = parsed_args.mode
        if mode == 'songs':
            self.browse_handler.handle_songs()
        elif mode == 'search':
            self.browse_handler.handle_search(parsed_args.query)
        elif mode == 'albums':
            self.browse_handler.handle_albums()
        elif mode == 'album':
            self.browse_handler.handle_album(parsed_args.album_id)
        elif mode == 'song':
            self.browse_handler.handle_song(parsed_args.track_id)
        elif mode == 'play':
            self.playback_handler.handle(
                track_id=parsed_args.track_id,
                album_id=parsed_args.album_id,
                query=parsed_args.query,
                favorites=parsed_args.favorites
            )
        elif mode == 'favorites':
            self.favorites_handler.handle_list()
        elif mode == 'like':
            self.favorites_handler.handle_toggle(parsed_args.track_id)

    def run(self, args: List[str] = None):
        """Run the CLI with given arguments."""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        try:
            self.dispatch(parsed_args)
        except KeyboardInterrupt:
            self.display_manager.console.print("\n[yellow]⚠[/yellow] Operation cancelled by user.")
            sys.exit(1)
        except NotFoundError as e:
            self.display_manager.print_error(f"Not found: {e}")
            sys.exit(1)
        except AuthenticationError as e:
            self.display_manager.print_error(f"Authentication failed: {e}")
            sys.exit(1)
        except ValueError as e:
            self.display_manager.print_error(f"Invalid input: {e}")
            sys.exit(1)
        except TunestandError as e:
            self.display_manager.print_error(f"An error occurred: {e}")
            sys.exit(1)
        finally:
            if self.dispatcher is not None:
                # Let queued play-count updates finish before exiting
                self.dispatcher.shutdown(wait=True)
