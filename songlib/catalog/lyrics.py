#!/usr/bin/env python
"""Lyric window selection: bounded, ordered slices of a song's verses."""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from songlib.catalog.cursor import DEFAULT_VERSE_PAGE_SIZE
from songlib.catalog.verses import join_verses
from songlib.database.db_manager import Song, Verse, db
from songlib.errors import SongNotFound, StorageError, ValidationError

logger = logging.getLogger(__name__)


def get_window(song_id: int, offset: int = 0, limit: int = DEFAULT_VERSE_PAGE_SIZE) -> List[str]:
    """Verses ``[offset, offset + limit)`` of a song in stored order.

    The window is clamped to the verses that exist, so an offset past the
    end gives an empty list. A missing song raises :class:`SongNotFound`
    rather than returning an empty window.
    """
    if offset < 0:
        raise ValidationError("'offset' must be a non-negative integer")
    if limit <= 0:
        raise ValidationError("'limit' must be a positive integer")

    try:
        exists = db.session.query(Song.id).filter(Song.id == song_id).first() is not None
        if not exists:
            raise SongNotFound(song_id)
        rows = (
            db.session.query(Verse.text)
            .filter(Verse.song_id == song_id)
            .order_by(Verse.position.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Failed to fetch verses of song %s: %s", song_id, exc, exc_info=True)
        raise StorageError(f"error fetching lyrics of song {song_id}") from exc
    return [text for (text,) in rows]


def get_lyrics(song_id: int, offset: int = 0, limit: int = DEFAULT_VERSE_PAGE_SIZE) -> str:
    """The selected window re-joined into a single blank-line separated blob."""
    return join_verses(get_window(song_id, offset, limit))


__all__ = ["get_window", "get_lyrics"]
