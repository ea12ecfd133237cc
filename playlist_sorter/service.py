from __future__ import annotations

import functools
import logging
from typing import List, Optional

from playlist_sorter.connectors.base import PlaylistClient
from playlist_sorter.enrichment import enrich
from playlist_sorter.errors import InvalidRequest, NotFoundOrEmpty
from playlist_sorter.log import redact
from playlist_sorter.models import PlaylistItem, PlaylistSummary, ReorderResult, SortDirection
from playlist_sorter.pagination import PLAYLIST_ITEMS_PAGE_LIMIT, PLAYLIST_PAGE_LIMIT, collect_all
from playlist_sorter.sorting import sort_items
from playlist_sorter.writeback import write_back

logger = logging.getLogger(__name__)


def _keep_track(item: PlaylistItem) -> bool:
    return not item.is_tombstone


def _keep_playlist(playlist: Optional[PlaylistSummary]) -> bool:
    return playlist is not None


class PlaylistSorter:
    """Request-level operations: list editable playlists and reorder one of them.

    Holds only the stateless remote client; every request runs its own
    fetch -> enrich -> sort -> write pipeline.
    """

    def __init__(self, client: PlaylistClient) -> None:
        self.client = client

    async def get_editable_playlists(self, credential: Optional[str]) -> List[PlaylistSummary]:
        if not credential:
            raise InvalidRequest("Access token is required.")
        logger.info("Fetching user playlists with token %s", redact(credential))
        user_id = await self.client.current_user_id(credential)
        playlists = await collect_all(
            functools.partial(self.client.list_playlists, credential),
            PLAYLIST_PAGE_LIMIT,
            keep=_keep_playlist,
        )
        editable = [playlist for playlist in playlists if playlist.is_editable_by(user_id)]
        logger.info("Found %d editable playlists out of %d for user %s", len(editable), len(playlists), user_id)
        return editable

    async def reorder_playlist(
        self,
        credential: Optional[str],
        playlist_id: Optional[str],
        sort_key: Optional[str],
        sort_direction: Optional[str],
    ) -> ReorderResult:
        if not credential:
            raise InvalidRequest("Access token is required.")
        if not playlist_id or not sort_key or not sort_direction:
            raise InvalidRequest("Playlist ID, sort criteria, and sort order are required.")
        try:
            direction = SortDirection(sort_direction)
        except ValueError as exc:
            raise InvalidRequest(f"Unknown sort order: {sort_direction}") from exc

        extra = {"playlist_id": playlist_id}
        logger.info(
            "Reordering playlist %s by %s (%s) with token %s",
            playlist_id,
            sort_key,
            direction.value,
            redact(credential),
            extra=extra,
        )

        items = await collect_all(
            functools.partial(self.client.list_playlist_items, credential, playlist_id),
            PLAYLIST_ITEMS_PAGE_LIMIT,
            keep=_keep_track,
        )
        if not items:
            raise NotFoundOrEmpty(playlist_id)
        logger.info("Collected %d items from playlist %s", len(items), playlist_id, extra=extra)

        items = await enrich(items, sort_key, functools.partial(self.client.get_tracks, credential))
        ordered = sort_items(items, sort_key, direction)
        uris = [item.track.uri for item in ordered]

        version_token = await write_back(self.client, credential, playlist_id, uris)
        logger.info("Playlist %s reordered, %d items written", playlist_id, len(uris), extra=extra)
        return ReorderResult(version_token=version_token, item_count=len(uris))
