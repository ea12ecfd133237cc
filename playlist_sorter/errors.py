from __future__ import annotations

from typing import Optional


class PlaylistSorterError(Exception):
    """Base class for failures surfaced by the reorder pipeline."""


class InvalidRequest(PlaylistSorterError):
    """Missing or malformed input, detected before any remote call."""


class Unauthorized(PlaylistSorterError):
    """The remote service rejected the credential."""


class NotFoundOrEmpty(PlaylistSorterError):
    """The playlist does not exist or holds no tracks."""

    def __init__(self, playlist_id: str, message: str = "Playlist not found or is empty.") -> None:
        super().__init__(message)
        self.playlist_id = playlist_id


class RemoteServiceError(PlaylistSorterError):
    """Any other non-2xx answer from the remote service, or a transport failure."""

    def __init__(self, status: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message


class PartialWriteFailure(PlaylistSorterError):
    """A write batch failed after earlier batches were already committed.

    The playlist is left as written so far; ``committed_items`` tells the caller
    how many leading items already sit in their new position.
    """

    def __init__(self, playlist_id: str, committed_items: int, total_items: int, cause: Exception) -> None:
        super().__init__(
            f"Playlist {playlist_id} partially rewritten: "
            f"{committed_items} of {total_items} items committed ({cause})"
        )
        self.playlist_id = playlist_id
        self.committed_items = committed_items
        self.total_items = total_items
        self.cause = cause
