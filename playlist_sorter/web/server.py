from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from playlist_sorter.config import AppConfig
from playlist_sorter.connectors.base import OAuthError
from playlist_sorter.connectors.spotify import SpotifyAuthenticator
from playlist_sorter.errors import (
    InvalidRequest,
    NotFoundOrEmpty,
    PartialWriteFailure,
    PlaylistSorterError,
    RemoteServiceError,
    Unauthorized,
)
from playlist_sorter.service import PlaylistSorter

logger = logging.getLogger(__name__)


def _bearer(request: Request) -> Optional[str]:
    header = request.headers.get("authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None


def error_response(exc: PlaylistSorterError) -> JSONResponse:
    """Translate a pipeline error into the JSON body and status the frontend expects."""
    if isinstance(exc, InvalidRequest):
        return JSONResponse({"message": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, Unauthorized):
        return JSONResponse(
            {"message": str(exc), "error": "spotify_api_error"},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    if isinstance(exc, NotFoundOrEmpty):
        return JSONResponse({"message": str(exc)}, status_code=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, PartialWriteFailure):
        return JSONResponse(
            {
                "message": "Playlist was only partially reordered.",
                "error": "partial_write",
                "committedItems": exc.committed_items,
                "totalItems": exc.total_items,
            },
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    if isinstance(exc, RemoteServiceError):
        return JSONResponse(
            {"message": exc.message, "error": "spotify_api_error"},
            status_code=exc.status or status.HTTP_502_BAD_GATEWAY,
        )
    return JSONResponse(
        {"message": "Failed to process playlist request.", "error": str(exc) or "unknown_error"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def build_app(
    *,
    config: AppConfig,
    sorter: PlaylistSorter,
    authenticator: SpotifyAuthenticator,
) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PlaylistSorterError)
    async def _sorter_error(request: Request, exc: PlaylistSorterError) -> JSONResponse:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return error_response(exc)

    @app.get("/health")
    async def health():
        return JSONResponse({"ok": True})

    @app.get("/auth/login")
    async def auth_login():
        try:
            url = authenticator.authorize_url(state=secrets.token_urlsafe(16))
        except OAuthError as exc:
            return JSONResponse({"message": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST)
        return RedirectResponse(url=url)

    @app.get("/auth/callback")
    async def auth_callback(request: Request) -> RedirectResponse:
        params = dict(request.query_params)
        if params.get("error"):
            logger.warning("Spotify callback error: %s", params["error"])
            return RedirectResponse(url=f"{config.frontend_url}/login-failed?error=SpotifyCallbackError")
        try:
            token = await authenticator.exchange_code(params.get("code"))
        except OAuthError as exc:
            logger.warning("Spotify token exchange failed: %s", exc)
            return RedirectResponse(url=f"{config.frontend_url}/login-failed?error=TokenError")
        query = urlencode(
            {
                "access_token": token.get("access_token", ""),
                "refresh_token": token.get("refresh_token", ""),
                "expires_in": token.get("expires_in", ""),
            }
        )
        return RedirectResponse(url=f"{config.frontend_url}/auth-callback?{query}")

    @app.get("/api/playlists")
    async def api_playlists(request: Request):
        credential = request.query_params.get("accessToken") or _bearer(request)
        playlists = await sorter.get_editable_playlists(credential)
        return JSONResponse({"playlists": [playlist.to_dict() for playlist in playlists]})

    @app.post("/api/playlist/{playlist_id}/reorder")
    async def api_reorder(request: Request, playlist_id: str, payload: Dict[str, Any]):
        credential = payload.get("accessToken") or _bearer(request)
        result = await sorter.reorder_playlist(
            credential=str(credential) if credential else None,
            playlist_id=playlist_id,
            sort_key=str(payload["sortCriteria"]) if payload.get("sortCriteria") else None,
            sort_direction=str(payload["sortOrder"]) if payload.get("sortOrder") else None,
        )
        return JSONResponse(
            {
                "message": "Playlist reordered successfully.",
                "sortedTracksCount": result.item_count,
                "snapshotId": result.version_token,
            }
        )

    return app
