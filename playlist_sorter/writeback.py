from __future__ import annotations

import logging
from typing import List, Sequence

from playlist_sorter.connectors.base import PlaylistClient
from playlist_sorter.errors import PartialWriteFailure
from playlist_sorter.models import PLAYLIST_CLEARED

logger = logging.getLogger(__name__)

WRITE_BATCH_LIMIT = 100


def chunked(uris: Sequence[str], size: int = WRITE_BATCH_LIMIT) -> List[List[str]]:
    return [list(uris[start : start + size]) for start in range(0, len(uris), size)]


async def write_back(client: PlaylistClient, credential: str, playlist_id: str, uris: Sequence[str]) -> str:
    """Rewrite a playlist so it holds ``uris`` in order; return the final version token.

    The first batch replaces the playlist contents and later batches are
    appended one after another. Nothing is retried or rolled back: if a later
    batch fails the playlist keeps what was written and ``PartialWriteFailure``
    reports how far it got.
    """
    if not uris:
        await client.replace_playlist_items(credential, playlist_id, [])
        logger.info("Playlist %s cleared", playlist_id, extra={"playlist_id": playlist_id})
        return PLAYLIST_CLEARED

    committed = 0
    version_token = ""
    for index, batch in enumerate(chunked(uris)):
        try:
            if index == 0:
                version_token = await client.replace_playlist_items(credential, playlist_id, batch)
            else:
                version_token = await client.append_playlist_items(credential, playlist_id, batch)
        except Exception as exc:
            if committed == 0:
                raise
            logger.error(
                "Playlist %s left partially rewritten after %d of %d items",
                playlist_id,
                committed,
                len(uris),
                extra={"playlist_id": playlist_id},
            )
            raise PartialWriteFailure(playlist_id, committed, len(uris), exc) from exc
        committed += len(batch)
        logger.info(
            "%s batch %d (%d items) on playlist %s, snapshot %s",
            "Replaced" if index == 0 else "Appended",
            index + 1,
            len(batch),
            playlist_id,
            version_token,
            extra={"playlist_id": playlist_id},
        )
    return version_token
