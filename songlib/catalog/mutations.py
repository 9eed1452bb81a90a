#!/usr/bin/env python
"""
Catalog mutation gateway: create, update and delete songs.

Every operation is a single transaction. Ids are assigned by storage and
never change; lyrics are written once at creation and are not touched by
updates.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from songlib.catalog.verses import split_verses
from songlib.database.db_manager import Song, Verse, db
from songlib.errors import SongNotFound, StorageError, ValidationError
from songlib.observability.metrics import record_mutation
from songlib.support.dates import RELEASE_DATE_FORMAT, parse_release_date

logger = logging.getLogger(__name__)


def _required_text(value: Optional[str], name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{name}' must be a non-empty string")
    return value


def _commit(action: str) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Failed to %s: %s", action, exc, exc_info=True)
        raise StorageError(f"failed to {action}") from exc


def get_song(song_id: int) -> Song:
    try:
        song = db.session.get(Song, song_id)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Failed to load song %s: %s", song_id, exc, exc_info=True)
        raise StorageError(f"error loading song {song_id}") from exc
    if song is None:
        raise SongNotFound(song_id)
    return song


def create_song(
    title: str,
    group: str,
    release_date: str,
    link: Optional[str] = "",
    lyrics: Optional[str] = "",
) -> int:
    """Store a new song with its verses and return the assigned id.

    ``release_date`` must use the DD.MM.YYYY format. Not idempotent: calling
    it twice stores two songs.
    """
    title = _required_text(title, "song")
    group = _required_text(group, "group")
    parsed_date = parse_release_date(release_date)
    if parsed_date is None:
        raise ValidationError(
            f"'releaseDate' must match {RELEASE_DATE_FORMAT} (got {release_date!r})"
        )

    song = Song(title=title, group_name=group, release_date=parsed_date, link=link or "")
    try:
        db.session.add(song)
        db.session.flush()
        for position, verse in enumerate(split_verses(lyrics or "")):
            db.session.add(Verse(song_id=song.id, position=position, text=verse))
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Failed to add song %r by %r: %s", title, group, exc, exc_info=True)
        raise StorageError("failed to add song") from exc
    _commit("add song")

    record_mutation("create")
    logger.info("Added song %s: %r by %r", song.id, title, group)
    return song.id


def update_song(
    song_id: int,
    *,
    title: Optional[str] = None,
    group: Optional[str] = None,
    release_date: Optional[str] = None,
    link: Optional[str] = None,
) -> Song:
    """Merge the given fields into an existing song.

    ``None`` means "not present". Empty title or group are also left
    unchanged, as is a release date that does not parse; unlike
    :func:`create_song`, a bad date here is not an error.
    """
    song = get_song(song_id)

    if isinstance(title, str) and title.strip():
        song.title = title
    if isinstance(group, str) and group.strip():
        song.group_name = group
    if release_date is not None:
        parsed_date = parse_release_date(release_date)
        if parsed_date is None:
            logger.debug("Ignoring unparsable releaseDate %r for song %s", release_date, song_id)
        else:
            song.release_date = parsed_date
    if link is not None:
        song.link = link

    _commit(f"update song {song_id}")
    record_mutation("update")
    return song


def delete_song(song_id: int) -> None:
    """Remove a song and its verses. Deleting a missing id is a no-op."""
    try:
        db.session.query(Verse).filter(Verse.song_id == song_id).delete(synchronize_session=False)
        deleted = db.session.query(Song).filter(Song.id == song_id).delete(synchronize_session=False)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Error deleting song with id %s: %s", song_id, exc, exc_info=True)
        raise StorageError(f"error deleting song with id {song_id}") from exc
    _commit(f"delete song {song_id}")

    if deleted:
        record_mutation("delete")
        logger.info("Deleted song %s", song_id)


def clear_catalog() -> None:
    """Remove every song and verse and restart id assignment."""
    try:
        dialect = db.session.get_bind().dialect.name
        if dialect == "postgresql":
            db.session.execute(text("TRUNCATE TABLE song_verses, songs RESTART IDENTITY CASCADE"))
        else:
            db.session.query(Verse).delete(synchronize_session=False)
            db.session.query(Song).delete(synchronize_session=False)
            if dialect == "sqlite":
                db.session.execute(
                    text("DELETE FROM sqlite_sequence WHERE name IN ('songs', 'song_verses')")
                )
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Failed to clear catalog: %s", exc, exc_info=True)
        raise StorageError("failed to clear catalog") from exc
    _commit("clear catalog")
    logger.info("Catalog cleared")


__all__ = ["get_song", "create_song", "update_song", "delete_song", "clear_catalog"]
