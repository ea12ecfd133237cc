from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

from playlist_sorter.models import Page

logger = logging.getLogger(__name__)

T = TypeVar("T")

PLAYLIST_PAGE_LIMIT = 50
PLAYLIST_ITEMS_PAGE_LIMIT = 100

FetchPage = Callable[[int, int], Awaitable[Page[T]]]


async def collect_all(
    fetch_page: FetchPage,
    limit: int,
    keep: Optional[Callable[[T], bool]] = None,
) -> List[T]:
    """Drain an offset-paginated listing, one page at a time.

    Pages are requested strictly in sequence because every offset depends on
    the size of the page before it. ``keep`` drops unwanted entries (deleted
    tracks) after the offset has moved past them. Errors from ``fetch_page``
    propagate as raised.
    """
    collected: List[T] = []
    offset = 0
    while True:
        page = await fetch_page(offset, limit)
        logger.debug("Fetched page at offset %d with %d items", offset, len(page.items))
        if keep is None:
            collected.extend(page.items)
        else:
            collected.extend(item for item in page.items if keep(item))
        if not page.has_more or not page.items:
            break
        offset += len(page.items)
    return collected
