"""
Catalog Client Module
A client for the hosted backend that stores songs, albums, likes and play counts.

The backend speaks PostgREST: tables live under /rest/v1/<table>, filters are
query parameters such as ``id=eq.<value>``, and database functions are called
with POST /rest/v1/rpc/<name>.
"""

import requests
from typing import Dict, List, Optional, Any, Iterable
from ..models.track import Track, Album
from ..models.user import UserSession
from ..core.config import CATALOG_CONFIG
from ..core.exceptions import (
    CatalogError,
    NotFoundError,
    RpcUnavailableError,
    AuthenticationError,
    NetworkError,
)
from ..core.logger import get_logger

logger = get_logger("clients.catalog")

# PostgREST error code for "function not found in the schema cache"
MISSING_FUNCTION_CODE = "PGRST202"


class CatalogClient:
    """Client for the hosted catalog backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or CATALOG_CONFIG["BASE_URL"]).rstrip("/")
        self.api_key = api_key or CATALOG_CONFIG["API_KEY"]
        self.timeout = timeout or CATALOG_CONFIG["TIMEOUT"]
        self.songs_table = CATALOG_CONFIG["SONGS_TABLE"]
        self.albums_table = CATALOG_CONFIG["ALBUMS_TABLE"]
        self.likes_table = CATALOG_CONFIG["LIKES_TABLE"]
        self.play_count_rpc = CATALOG_CONFIG["PLAY_COUNT_RPC"]
        self.user: Optional[UserSession] = None

        self.session = session or requests.Session()
        self.session.headers.update({
            'apikey': self.api_key,
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        })

    def _rest_url(self, path: str) -> str:
        return f"{self.base_url}{CATALOG_CONFIG['REST_PATH']}/{path.lstrip('/')}"

    def _auth_url(self, path: str) -> str:
        return f"{self.base_url}{CATALOG_CONFIG['AUTH_PATH']}/{path.lstrip('/')}"

    def _get_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Per-request headers; a signed-in user's token takes precedence over the anon key."""
        token = self.user.access_token if self.user else self.api_key
        headers = {"Authorization": f"Bearer {token}"}
        if extra:
            headers.update(extra)
        return headers

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            return (
                body.get("message")
                or body.get("error_description")
                or body.get("msg")
                or body.get("error")
                or f"HTTP {response.status_code}"
            )
        return str(body)

    @staticmethod
    def _error_code(response: requests.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        return body.get("code") if isinstance(body, dict) else None

    def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        Send a request and translate failures into catalog exceptions.

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            NetworkError: Connection failure or timeout
            AuthenticationError: HTTP 401/403
            NotFoundError: HTTP 404
            CatalogError: Any other failed request
        """
        logger.debug(f"{method} {url} params={params}")
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._get_headers(headers),
                timeout=self.timeout
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise NetworkError(f"Could not reach catalog backend: {e}") from e
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"Catalog request failed: {e}") from e

        if response.status_code >= 400:
            message = self._error_message(response)
            code = self._error_code(response)
            if response.status_code in (401, 403):
                raise AuthenticationError(message, response.status_code, code)
            if response.status_code == 404:
                raise NotFoundError(message, response.status_code, code)
            raise CatalogError(message, response.status_code, code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise CatalogError(f"Catalog returned invalid JSON: {e}", response.status_code) from e

    def _select(self, table: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        params = {"select": "*", **params}
        rows = self._make_request("GET", self._rest_url(table), params=params)
        return rows or []

    # Tracks

    def list_tracks(self, published_only: bool = True, order: str = "created_at.desc") -> List[Track]:
        """List tracks, newest first by default."""
        params = {"order": order}
        if published_only:
            params["is_published"] = "eq.true"
        return [Track.from_row(row) for row in self._select(self.songs_table, params)]

    def get_track(self, track_id: str) -> Track:
        """Fetch a single track by id."""
        rows = self._select(self.songs_table, {"id": f"eq.{track_id}"})
        if not rows:
            raise NotFoundError(f"Track {track_id} not found", 404)
        return Track.from_row(rows[0])

    def get_tracks_by_ids(self, track_ids: Iterable[str], published_only: bool = True) -> List[Track]:
        """Fetch the tracks whose ids are listed; order follows the backend's title order."""
        ids = [str(track_id) for track_id in track_ids]
        if not ids:
            return []
        params = {"id": f"in.({','.join(ids)})", "order": "title.asc"}
        if published_only:
            params["is_published"] = "eq.true"
        return [Track.from_row(row) for row in self._select(self.songs_table, params)]

    def get_related_tracks(self, track_id: str, limit: Optional[int] = None) -> List[Track]:
        """Other published tracks to suggest next to a track."""
        params = {
            "is_published": "eq.true",
            "id": f"neq.{track_id}",
            "limit": limit if limit is not None else CATALOG_CONFIG["RELATED_LIMIT"],
        }
        return [Track.from_row(row) for row in self._select(self.songs_table, params)]

    # Albums

    def list_albums(self) -> List[Album]:
        """List albums, newest first."""
        rows = self._select(self.albums_table, {"order": "created_at.desc"})
        return [Album.from_row(row) for row in rows]

    def get_album(self, album_id: str) -> Album:
        rows = self._select(self.albums_table, {"id": f"eq.{album_id}"})
        if not rows:
            raise NotFoundError(f"Album {album_id} not found", 404)
        return Album.from_row(rows[0])

    # Play counts

    def increment_play_count(self, track_id: str) -> None:
        """
        Atomically add one play via the backend's increment function.

        Raises:
            RpcUnavailableError: The function is not deployed on the backend
        """
        url = self._rest_url(f"rpc/{self.play_count_rpc}")
        try:
            self._make_request("POST", url, json={"song_id": track_id})
        except CatalogError as e:
            if isinstance(e, NotFoundError) or e.code == MISSING_FUNCTION_CODE:
                raise RpcUnavailableError(
                    f"Backend function {self.play_count_rpc} is not available: {e}",
                    e.status_code,
                    e.code
                ) from e
            raise

    def get_play_count(self, track_id: str) -> int:
        rows = self._make_request(
            "GET",
            self._rest_url(self.songs_table),
            params={"select": "play_count", "id": f"eq.{track_id}"}
        )
        if not rows:
            raise NotFoundError(f"Track {track_id} not found", 404)
        return int(rows[0].get("play_count") or 0)

    def set_play_count(self, track_id: str, play_count: int) -> None:
        self._make_request(
            "PATCH",
            self._rest_url(self.songs_table),
            params={"id": f"eq.{track_id}"},
            json={"play_count": play_count},
            headers={"Prefer": "return=minimal"}
        )

    def has_rpc(self, name: str) -> bool:
        """
        Check whether a database function is exposed, using the OpenAPI
        document PostgREST serves at the REST root.

        Raises:
            CatalogError: The root did not return an OpenAPI document, so
                nothing can be said about the function
        """
        document = self._make_request("GET", self._rest_url(""))
        if not isinstance(document, dict) or not isinstance(document.get("paths"), dict):
            raise CatalogError("Catalog root did not return an OpenAPI document")
        return f"/rpc/{name}" in document["paths"]

    # Authentication

    def sign_in(self, email: str, password: str) -> UserSession:
        """Sign in with email and password; later requests run as this user."""
        try:
            data = self._make_request(
                "POST",
                self._auth_url("token"),
                params={"grant_type": "password"},
                json={"email": email, "password": password}
            )
        except CatalogError as e:
            if isinstance(e, NetworkError):
                raise
            raise AuthenticationError(f"Sign-in failed: {e}", e.status_code) from e

        if not data or not data.get("access_token"):
            raise AuthenticationError("Sign-in returned no access token")

        user = data.get("user") or {}
        self.user = UserSession(
            user_id=str(user.get("id", "")),
            access_token=data["access_token"],
            email=user.get("email", email),
            refresh_token=data.get("refresh_token"),
        )
        logger.info(f"Signed in as {self.user.email}")
        return self.user

    def sign_out(self) -> None:
        self.user = None

    def require_user(self) -> UserSession:
        if not self.user:
            raise AuthenticationError("A signed-in user is required")
        return self.user

    # Likes

    def get_liked_track_ids(self, user_id: str) -> List[str]:
        rows = self._make_request(
            "GET",
            self._rest_url(self.likes_table),
            params={"select": "song_id", "user_id": f"eq.{user_id}"}
        ) or []
        return [str(row["song_id"]) for row in rows if row.get("song_id")]

    def add_like(self, user_id: str, track_id: str) -> None:
        self._make_request(
            "POST",
            self._rest_url(self.likes_table),
            json={"user_id": user_id, "song_id": track_id},
            headers={"Prefer": "return=minimal"}
        )

    def remove_like(self, user_id: str, track_id: str) -> None:
        self._make_request(
            "DELETE",
            self._rest_url(self.likes_table),
            params={"user_id": f"eq.{user_id}", "song_id": f"eq.{track_id}"}
        )
