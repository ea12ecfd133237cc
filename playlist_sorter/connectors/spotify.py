from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from playlist_sorter.connectors.base import OAuthError, PlaylistClient
from playlist_sorter.errors import InvalidRequest, RemoteServiceError, Unauthorized
from playlist_sorter.log import redact
from playlist_sorter.models import Page, PlaylistItem, PlaylistSummary, Track

logger = logging.getLogger(__name__)

SPOTIFY_SCOPE = "playlist-read-private playlist-read-collaborative playlist-modify-private playlist-modify-public"

MAX_PLAYLISTS_PER_PAGE = 50
MAX_ITEMS_PER_PAGE = 100
MAX_TRACK_IDS = 50
MAX_WRITE_URIS = 100


def _check_ceiling(name: str, size: int, ceiling: int) -> None:
    if size > ceiling:
        raise InvalidRequest(f"{name} accepts at most {ceiling} elements, got {size}.")


def remote_message(exc: SpotifyException) -> str:
    """Spotify's own error message, without the request url spotipy prepends."""
    return str(exc.msg).split(":\n ", 1)[-1].strip()


class SpotifyClient(PlaylistClient):
    """Stateless Spotify Web API client.

    A fresh ``spotipy.Spotify`` handle is built for every call from the
    credential passed in, so concurrent requests never share a token.
    """

    def __init__(self, requests_timeout: float = 10.0) -> None:
        self.requests_timeout = requests_timeout

    def _spotify(self, credential: str) -> spotipy.Spotify:
        # Retries stay off: replace/append are not safe to repeat blindly.
        return spotipy.Spotify(
            auth=credential,
            requests_timeout=self.requests_timeout,
            retries=0,
            status_retries=0,
        )

    async def _call(self, credential: str, operation: str, *args: Any, **kwargs: Any) -> Any:
        method = getattr(self._spotify(credential), operation)
        try:
            return await asyncio.to_thread(method, *args, **kwargs)
        except SpotifyException as exc:
            logger.warning(
                "Spotify %s failed with status %s for credential %s",
                operation,
                exc.http_status,
                redact(credential),
            )
            if exc.http_status == 401:
                raise Unauthorized(remote_message(exc)) from exc
            raise RemoteServiceError(exc.http_status, remote_message(exc)) from exc
        except requests.RequestException as exc:
            logger.warning("Spotify %s transport failure: %s", operation, exc)
            raise RemoteServiceError(None, str(exc)) from exc

    async def current_user_id(self, credential: str) -> str:
        profile = await self._call(credential, "current_user")
        return profile["id"]

    async def list_playlists(
        self, credential: str, offset: int, limit: int
    ) -> Page[Optional[PlaylistSummary]]:
        _check_ceiling("list_playlists", limit, MAX_PLAYLISTS_PER_PAGE)
        results = await self._call(credential, "current_user_playlists", limit=limit, offset=offset)
        return Page(
            items=[PlaylistSummary.from_api(item) if item else None for item in results.get("items") or []],
            has_more=bool(results.get("next")),
        )

    async def list_playlist_items(
        self, credential: str, playlist_id: str, offset: int, limit: int
    ) -> Page[PlaylistItem]:
        _check_ceiling("list_playlist_items", limit, MAX_ITEMS_PER_PAGE)
        results = await self._call(
            credential,
            "playlist_items",
            playlist_id,
            limit=limit,
            offset=offset,
            additional_types=("track",),
        )
        return Page(
            items=[PlaylistItem.from_api(item) for item in results.get("items") or []],
            has_more=bool(results.get("next")),
        )

    async def get_tracks(self, credential: str, ids: Sequence[str]) -> List[Track]:
        _check_ceiling("get_tracks", len(ids), MAX_TRACK_IDS)
        if not ids:
            return []
        results = await self._call(credential, "tracks", list(ids))
        return [Track.from_api(track) for track in results.get("tracks") or [] if track]

    async def replace_playlist_items(self, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
        _check_ceiling("replace_playlist_items", len(uris), MAX_WRITE_URIS)
        result = await self._call(credential, "playlist_replace_items", playlist_id, list(uris))
        return result["snapshot_id"]

    async def append_playlist_items(self, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
        _check_ceiling("append_playlist_items", len(uris), MAX_WRITE_URIS)
        result = await self._call(credential, "playlist_add_items", playlist_id, list(uris))
        return result["snapshot_id"]


class SpotifyAuthenticator:
    """Authorization-code flow; tokens are handed back to the caller, never kept."""

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str | None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri or "http://127.0.0.1:3001/auth/callback"

    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def _oauth(self, state: Optional[str] = None) -> SpotifyOAuth:
        if not self.is_configured():
            raise OAuthError("Spotify credentials are not configured.")
        return SpotifyOAuth(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            scope=SPOTIFY_SCOPE,
            state=state,
            cache_handler=MemoryCacheHandler(),
        )

    def authorize_url(self, state: Optional[str] = None) -> str:
        return self._oauth(state).get_authorize_url()

    async def exchange_code(self, code: str | None) -> Dict[str, Any]:
        if not code:
            raise OAuthError("Spotify callback missing code parameter.")
        oauth = self._oauth()

        def _exchange() -> Dict[str, Any]:
            return oauth.get_access_token(code=code, check_cache=False)

        try:
            return await asyncio.to_thread(_exchange)
        except SpotifyOauthError as exc:
            raise OAuthError(str(exc)) from exc
