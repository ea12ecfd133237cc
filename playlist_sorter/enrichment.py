from __future__ import annotations

import dataclasses
import logging
from typing import Awaitable, Callable, Dict, List, Sequence

from playlist_sorter.models import Album, PlaylistItem, SortKey, Track

logger = logging.getLogger(__name__)

TRACK_METADATA_BATCH = 50

FetchTracks = Callable[[Sequence[str]], Awaitable[List[Track]]]


def _needs_release_date(item: PlaylistItem) -> bool:
    return item.track is not None and not item.track.album.release_date


def merge_album(original: Album, returned: Album) -> Album:
    """Overlay the fields ``returned`` carries onto ``original``."""
    updates = {}
    for album_field in dataclasses.fields(Album):
        value = getattr(returned, album_field.name)
        if value is not None and value != []:
            updates[album_field.name] = value
    return dataclasses.replace(original, **updates)


async def enrich(items: List[PlaylistItem], sort_key: object, fetch_tracks: FetchTracks) -> List[PlaylistItem]:
    """Back-fill album release dates when sorting by release date needs them.

    Every lookup batch is fetched before any item is touched, so a failing
    batch leaves the items exactly as they were. Items keep their identity
    and order.
    """
    if sort_key != SortKey.RELEASE_DATE:
        return items

    missing_ids: List[str] = []
    seen = set()
    for item in items:
        if _needs_release_date(item) and item.track.id and item.track.id not in seen:
            seen.add(item.track.id)
            missing_ids.append(item.track.id)
    if not missing_ids:
        return items

    logger.info("Fetching release dates for %d tracks", len(missing_ids))
    details: Dict[str, Track] = {}
    for start in range(0, len(missing_ids), TRACK_METADATA_BATCH):
        batch = missing_ids[start : start + TRACK_METADATA_BATCH]
        for track in await fetch_tracks(batch):
            if track.id:
                details[track.id] = track

    for item in items:
        if item.track is None or item.track.id not in details:
            continue
        item.track.album = merge_album(item.track.album, details[item.track.id].album)
    return items
