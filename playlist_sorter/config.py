from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class AppConfig:
    """Static configuration for the service."""

    host: str = field(default_factory=lambda: os.getenv("PLAYLIST_SORTER_HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PLAYLIST_SORTER_PORT", "3001")))
    log_level: str = field(default_factory=lambda: os.getenv("PLAYLIST_SORTER_LOG_LEVEL", "INFO"))
    request_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("PLAYLIST_SORTER_REQUEST_TIMEOUT", "10"))
    )
    frontend_url: str = field(default_factory=lambda: os.getenv("FRONTEND_URL", "http://localhost:3000"))


@dataclass
class OAuthConfig:
    """Spotify application credentials provided by the operator."""

    spotify_client_id: str | None = None
    spotify_client_secret: str | None = None
    spotify_redirect_uri: str | None = None

    @classmethod
    def from_env(cls) -> "OAuthConfig":
        return cls(
            spotify_client_id=os.getenv("SPOTIFY_CLIENT_ID"),
            spotify_client_secret=os.getenv("SPOTIFY_CLIENT_SECRET"),
            spotify_redirect_uri=os.getenv("SPOTIFY_REDIRECT_URI"),
        )
