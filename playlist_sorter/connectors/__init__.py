from .base import OAuthError, PlaylistClient
from .spotify import SpotifyAuthenticator, SpotifyClient

__all__ = ["OAuthError", "PlaylistClient", "SpotifyAuthenticator", "SpotifyClient"]
