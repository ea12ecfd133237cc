"""Ordering of playlist items by a single sort key.

Each key maps an item to a comparable value; the table below is the only
place missing data gets a default:

    date_added     parsed ``added_at`` timestamp      missing -> Unix epoch
    release_date   start of the YYYY / YYYY-MM / YYYY-MM-DD period
                                                      missing -> Unix epoch
    name           casefolded track name              missing -> ""
    artist_name    casefolded first artist name       missing -> ""
    album_name     casefolded album name              missing -> ""
    duration_ms    integer                            missing -> 0
    popularity     integer                            missing -> 0

Python's ``sorted`` is stable, also with ``reverse=True``, so equal values
keep their original relative order in both directions.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from playlist_sorter.models import PlaylistItem, SortDirection, SortKey

EARLIEST = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RELEASE_DATE_FORMATS = {4: "%Y", 7: "%Y-%m", 10: "%Y-%m-%d"}


def parse_release_date(value: Optional[str]) -> datetime:
    """Parse a release date of year, month or day precision to the start of that period."""
    if not value:
        return EARLIEST
    value = value.strip()
    fmt = _RELEASE_DATE_FORMATS.get(len(value))
    if fmt is None:
        return EARLIEST
    try:
        return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
    except ValueError:
        return EARLIEST


def parse_added_at(value: Optional[str]) -> datetime:
    if not value:
        return EARLIEST
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _folded(value: Optional[str]) -> str:
    return (value or "").casefold()


def _first_artist(item: PlaylistItem) -> str:
    artists = item.track.artists
    return _folded(artists[0].name) if artists else ""


SORT_VALUES: Dict[SortKey, Callable[[PlaylistItem], Any]] = {
    SortKey.DATE_ADDED: lambda item: parse_added_at(item.added_at),
    SortKey.RELEASE_DATE: lambda item: parse_release_date(item.track.album.release_date),
    SortKey.NAME: lambda item: _folded(item.track.name),
    SortKey.ARTIST_NAME: _first_artist,
    SortKey.ALBUM_NAME: lambda item: _folded(item.track.album.name),
    SortKey.DURATION_MS: lambda item: item.track.duration_ms or 0,
    SortKey.POPULARITY: lambda item: item.track.popularity or 0,
}


def sort_items(
    items: Sequence[PlaylistItem],
    key: Union[SortKey, str],
    direction: Union[SortDirection, str] = SortDirection.ASCENDING,
) -> List[PlaylistItem]:
    """Return ``items`` ordered by ``key``.

    An unrecognised key leaves the order untouched.
    """
    try:
        sort_key = SortKey(key)
    except ValueError:
        return list(items)
    return sorted(
        items,
        key=SORT_VALUES[sort_key],
        reverse=SortDirection(direction) == SortDirection.DESCENDING,
    )
