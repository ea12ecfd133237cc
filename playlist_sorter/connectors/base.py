from __future__ import annotations

import abc
from typing import List, Optional, Sequence

from playlist_sorter.models import Page, PlaylistItem, PlaylistSummary, Track


class OAuthError(Exception):
    """Raised when OAuth authentication cannot be completed."""


class PlaylistClient(abc.ABC):
    """Capabilities of a remote playlist service.

    Implementations hold no request state: every call receives the caller's
    bearer credential explicitly.
    """

    @abc.abstractmethod
    async def current_user_id(self, credential: str) -> str:
        """Return the id of the user the credential belongs to."""

    @abc.abstractmethod
    async def list_playlists(
        self, credential: str, offset: int, limit: int
    ) -> Page[Optional[PlaylistSummary]]:
        """Return one page of the user's playlists; unavailable entries stay as ``None``."""

    @abc.abstractmethod
    async def list_playlist_items(
        self, credential: str, playlist_id: str, offset: int, limit: int
    ) -> Page[PlaylistItem]:
        """Return one page of a playlist's items, tombstones included."""

    @abc.abstractmethod
    async def get_tracks(self, credential: str, ids: Sequence[str]) -> List[Track]:
        """Return full track metadata for up to 50 ids."""

    @abc.abstractmethod
    async def replace_playlist_items(self, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
        """Replace the playlist contents with up to 100 uris and return the new version token."""

    @abc.abstractmethod
    async def append_playlist_items(self, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
        """Append up to 100 uris to the playlist and return the new version token."""
