#!/usr/bin/env python
"""
Seek-based catalog pagination.

Entries are totally ordered by (group_name, title, id). A page is the first
``limit`` entries strictly after the cursor's (group, title) *value*; the
boundary entry is never returned twice and there is no backward paging.

There is no snapshot across pages. An entry inserted or deleted exactly at
the boundary between two calls may be skipped or repeated, and entries that
share the boundary's (group, title) but have a larger id are skipped by the
next page.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError

from songlib.catalog.cursor import (
    DEFAULT_SONG_PAGE_SIZE,
    GroupCursor,
    PageCursor,
    encode_cursor,
    decode_cursor,
)
from songlib.database.db_manager import Song, db
from songlib.errors import StorageError, ValidationError
from songlib.observability.metrics import observe_page_size

logger = logging.getLogger(__name__)


def _require_positive(limit: int) -> None:
    if not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0:
        raise ValidationError("'limit' must be a positive integer")


def _run(query, limit: int, description: str) -> List[Song]:
    try:
        songs = query.limit(limit).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Failed to fetch %s: %s", description, exc, exc_info=True)
        raise StorageError(f"error fetching {description}") from exc
    observe_page_size(len(songs))
    return songs


def list_all(cursor: Optional[PageCursor] = None, limit: int = DEFAULT_SONG_PAGE_SIZE) -> List[Song]:
    """Next page of the whole catalog in (group, title, id) order."""
    _require_positive(limit)
    query = Song.query
    if cursor is not None:
        query = query.filter(
            or_(
                Song.group_name > cursor.last_group,
                and_(Song.group_name == cursor.last_group, Song.title > cursor.last_title),
            )
        )
    query = query.order_by(Song.group_name.asc(), Song.title.asc(), Song.id.asc())
    return _run(query, limit, "songs")


def list_by_group(
    group: str,
    cursor: Optional[GroupCursor] = None,
    limit: int = DEFAULT_SONG_PAGE_SIZE,
) -> List[Song]:
    """Next page of one group's songs in (title, id) order."""
    _require_positive(limit)
    query = Song.query.filter(Song.group_name == group)
    if cursor is not None:
        query = query.filter(Song.title > cursor.last_title)
    query = query.order_by(Song.title.asc(), Song.id.asc())
    return _run(query, limit, f"songs of group {group!r}")


def iter_catalog(page_size: int = DEFAULT_SONG_PAGE_SIZE) -> Iterator[Song]:
    """Walk the whole catalog page by page, feeding each last entry back as the cursor."""
    cursor = None
    while True:
        page = list_all(cursor, page_size)
        if not page:
            return
        yield from page
        params = encode_cursor(page[-1])
        cursor = decode_cursor(params["prevGroup"], params["prevSong"])


__all__ = ["list_all", "list_by_group", "iter_catalog"]
