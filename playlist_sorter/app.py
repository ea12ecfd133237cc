from __future__ import annotations

from fastapi import FastAPI

from playlist_sorter.config import AppConfig, OAuthConfig
from playlist_sorter.connectors import SpotifyAuthenticator, SpotifyClient
from playlist_sorter.log import setup_logging
from playlist_sorter.service import PlaylistSorter
from playlist_sorter.web import build_app


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig()
    setup_logging(config.log_level)
    oauth = OAuthConfig.from_env()

    client = SpotifyClient(requests_timeout=config.request_timeout_seconds)
    sorter = PlaylistSorter(client=client)
    authenticator = SpotifyAuthenticator(
        client_id=oauth.spotify_client_id,
        client_secret=oauth.spotify_client_secret,
        redirect_uri=oauth.spotify_redirect_uri,
    )
    app = build_app(config=config, sorter=sorter, authenticator=authenticator)
    app.state.config = config
    app.state.sorter = sorter
    return app
