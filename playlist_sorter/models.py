from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

T = TypeVar("T")

PLAYLIST_CLEARED = "playlist_cleared"


class SortKey(str, Enum):
    DATE_ADDED = "date_added"
    RELEASE_DATE = "release_date"
    NAME = "name"
    ARTIST_NAME = "artist_name"
    ALBUM_NAME = "album_name"
    DURATION_MS = "duration_ms"
    POPULARITY = "popularity"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass
class Artist:
    name: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Artist":
        return cls(name=payload.get("name"))


@dataclass
class Album:
    id: Optional[str] = None
    name: Optional[str] = None
    release_date: Optional[str] = None
    release_date_precision: Optional[str] = None
    images: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: Optional[Mapping[str, Any]]) -> "Album":
        payload = payload or {}
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            release_date=payload.get("release_date") or None,
            release_date_precision=payload.get("release_date_precision"),
            images=list(payload.get("images") or []),
        )


@dataclass
class Track:
    id: Optional[str]
    name: Optional[str] = None
    artists: List[Artist] = field(default_factory=list)
    album: Album = field(default_factory=Album)
    duration_ms: Optional[int] = None
    popularity: Optional[int] = None
    uri: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Track":
        return cls(
            id=payload.get("id"),
            name=payload.get("name"),
            artists=[Artist.from_api(artist) for artist in payload.get("artists") or []],
            album=Album.from_api(payload.get("album")),
            duration_ms=payload.get("duration_ms"),
            popularity=payload.get("popularity"),
            uri=payload.get("uri"),
        )


@dataclass
class PlaylistItem:
    """One playlist entry; ``track`` is ``None`` when the track was removed upstream."""

    added_at: Optional[str]
    track: Optional[Track]

    @property
    def is_tombstone(self) -> bool:
        return self.track is None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "PlaylistItem":
        track = payload.get("track")
        return cls(
            added_at=payload.get("added_at"),
            track=Track.from_api(track) if track else None,
        )


@dataclass
class PlaylistOwner:
    id: str
    display_name: Optional[str] = None


@dataclass
class PlaylistSummary:
    id: str
    name: str
    owner: PlaylistOwner
    description: Optional[str] = None
    images: List[Dict[str, Any]] = field(default_factory=list)
    tracks: Dict[str, Any] = field(default_factory=dict)
    uri: Optional[str] = None
    external_urls: Dict[str, str] = field(default_factory=dict)
    collaborative: bool = False

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "PlaylistSummary":
        owner = payload.get("owner") or {}
        return cls(
            id=payload["id"],
            name=payload.get("name", ""),
            owner=PlaylistOwner(id=owner.get("id", ""), display_name=owner.get("display_name")),
            description=payload.get("description"),
            images=list(payload.get("images") or []),
            tracks=dict(payload.get("tracks") or {}),
            uri=payload.get("uri"),
            external_urls=dict(payload.get("external_urls") or {}),
            collaborative=bool(payload.get("collaborative")),
        )

    def is_editable_by(self, user_id: str) -> bool:
        return self.owner.id == user_id or self.collaborative

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "images": self.images,
            "tracks": self.tracks,
            "external_urls": self.external_urls,
            "uri": self.uri,
            "owner": {"id": self.owner.id, "display_name": self.owner.display_name},
        }


@dataclass
class Page(Generic[T]):
    items: List[T]
    has_more: bool


@dataclass
class ReorderResult:
    version_token: str
    item_count: int
