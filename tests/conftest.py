from typing import Dict, List, Optional, Sequence

import pytest

from playlist_sorter.connectors.base import PlaylistClient
from playlist_sorter.models import Album, Artist, Page, PlaylistItem, PlaylistOwner, PlaylistSummary, Track


def make_item(
    name: str,
    *,
    track_id: Optional[str] = None,
    release_date: Optional[str] = None,
    added_at: str = "2021-01-01T00:00:00Z",
    artist: Optional[str] = "Artist",
    album: Optional[str] = "Album",
    duration_ms: Optional[int] = 180000,
    popularity: Optional[int] = 50,
) -> PlaylistItem:
    track_id = track_id or f"id-{name}"
    return PlaylistItem(
        added_at=added_at,
        track=Track(
            id=track_id,
            name=name,
            artists=[Artist(name=artist)] if artist is not None else [],
            album=Album(id=f"album-{track_id}", name=album, release_date=release_date),
            duration_ms=duration_ms,
            popularity=popularity,
            uri=f"spotify:track:{track_id}",
        ),
    )


class FakePlaylistClient(PlaylistClient):
    """In-memory remote service recording every call it receives."""

    def __init__(
        self,
        items: Optional[List[PlaylistItem]] = None,
        playlists: Optional[List[PlaylistSummary]] = None,
        user_id: str = "me",
        track_details: Optional[Dict[str, Track]] = None,
    ) -> None:
        self.items = list(items or [])
        self.playlists = list(playlists or [])
        self.user_id = user_id
        self.track_details = dict(track_details or {})
        self.calls: List[tuple] = []
        self.credentials: List[str] = []
        self.fail_on_call: Optional[int] = None
        self._tokens = 0

    def _record(self, credential: str, *call) -> None:
        self.credentials.append(credential)
        self.calls.append(call)

    def _next_token(self) -> str:
        self._tokens += 1
        return f"snapshot-{self._tokens}"

    async def current_user_id(self, credential: str) -> str:
        self._record(credential, "current_user")
        return self.user_id

    async def list_playlists(self, credential: str, offset: int, limit: int) -> Page[Optional[PlaylistSummary]]:
        self._record(credential, "list_playlists", offset, limit)
        window = self.playlists[offset : offset + limit]
        return Page(items=window, has_more=offset + limit < len(self.playlists))

    async def list_playlist_items(self, credential: str, playlist_id: str, offset: int, limit: int):
        self._record(credential, "list_playlist_items", playlist_id, offset, limit)
        window = self.items[offset : offset + limit]
        return Page(items=window, has_more=offset + limit < len(self.items))

    async def get_tracks(self, credential: str, ids: Sequence[str]) -> List[Track]:
        self._record(credential, "get_tracks", list(ids))
        return [self.track_details[track_id] for track_id in ids if track_id in self.track_details]

    async def _write(self, credential: str, kind: str, playlist_id: str, uris: Sequence[str]) -> str:
        self._record(credential, kind, playlist_id, list(uris))
        writes = [call for call in self.calls if call[0] in ("replace", "append")]
        if self.fail_on_call is not None and len(writes) == self.fail_on_call:
            raise RuntimeError(f"{kind} rejected")
        return self._next_token()

    async def replace_playlist_items(self, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
        return await self._write(credential, "replace", playlist_id, uris)

    async def append_playlist_items(self, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
        return await self._write(credential, "append", playlist_id, uris)


def make_playlist(playlist_id: str, owner_id: str, collaborative: bool = False) -> PlaylistSummary:
    return PlaylistSummary(
        id=playlist_id,
        name=f"Playlist {playlist_id}",
        owner=PlaylistOwner(id=owner_id, display_name=owner_id.title()),
        collaborative=collaborative,
        tracks={"href": f"https://api.spotify.com/v1/playlists/{playlist_id}/tracks", "total": 3},
        uri=f"spotify:playlist:{playlist_id}",
    )


@pytest.fixture()
def fake_client() -> FakePlaylistClient:
    return FakePlaylistClient()
