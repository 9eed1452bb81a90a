#!/usr/bin/env python
"""
Client-visible resume points for catalog pagination.

A cursor is nothing more than the raw (group, title) values of the last
entry a client has seen. Encoding and decoding are the identity over those
strings: no internal id leaks into the cursor and nothing is signed, so a
client may forge or hand-write one. Pagination seeks by value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from songlib.errors import ValidationError

DEFAULT_SONG_PAGE_SIZE = 10
DEFAULT_VERSE_PAGE_SIZE = 20
# Largest value storage can bind as an integer parameter
MAX_STORAGE_INT = 2**63 - 1


@dataclass(frozen=True)
class PageCursor:
    """Resume point for the global listing."""

    last_group: str
    last_title: str


@dataclass(frozen=True)
class GroupCursor:
    """Resume point for a single group's listing."""

    last_title: str


def decode_cursor(prev_group: Optional[str], prev_song: Optional[str]) -> Optional[PageCursor]:
    """Build a cursor from the prevGroup/prevSong query values; both absent means start."""
    if prev_group is None and prev_song is None:
        return None
    return PageCursor(last_group=prev_group or "", last_title=prev_song or "")


def decode_group_cursor(prev_song: Optional[str]) -> Optional[GroupCursor]:
    if prev_song is None:
        return None
    return GroupCursor(last_title=prev_song)


def encode_cursor(song: Any) -> Dict[str, str]:
    """Query parameters that resume the global listing right after ``song``.

    Accepts either a ``Song`` row or its SongInfo dict.
    """
    if isinstance(song, dict):
        return {"prevGroup": song["group"], "prevSong": song["song"]}
    return {"prevGroup": song.group_name, "prevSong": song.title}


def encode_group_cursor(song: Any) -> Dict[str, str]:
    if isinstance(song, dict):
        return {"prevSong": song["song"]}
    return {"prevSong": song.title}


def _parse_int(raw: Any, name: str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"'{name}' must be an integer")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except (TypeError, ValueError):
            raise ValidationError(f"'{name}' must be an integer") from None
    if not -MAX_STORAGE_INT - 1 <= value <= MAX_STORAGE_INT:
        raise ValidationError(f"'{name}' is out of range")
    return value


def parse_limit(raw: Any, default: int, maximum: Optional[int] = None, name: str = "limit") -> int:
    """Validate a page size. Missing or empty values fall back to ``default``."""
    if raw is None or raw == "":
        return default
    limit = _parse_int(raw, name)
    if limit <= 0:
        raise ValidationError(f"'{name}' must be a positive integer")
    if maximum is not None and limit > maximum:
        raise ValidationError(f"'{name}' must not exceed {maximum}")
    return limit


def parse_offset(raw: Any, name: str = "offset") -> int:
    if raw is None or raw == "":
        return 0
    offset = _parse_int(raw, name)
    if offset < 0:
        raise ValidationError(f"'{name}' must be a non-negative integer")
    return offset


def parse_song_id(raw: Any) -> int:
    if raw is None or raw == "":
        raise ValidationError("missing 'id' parameter")
    song_id = _parse_int(raw, "id")
    if song_id <= 0:
        raise ValidationError("'id' must be a positive integer")
    return song_id


__all__ = [
    "DEFAULT_SONG_PAGE_SIZE",
    "DEFAULT_VERSE_PAGE_SIZE",
    "PageCursor",
    "GroupCursor",
    "decode_cursor",
    "decode_group_cursor",
    "encode_cursor",
    "encode_group_cursor",
    "parse_limit",
    "parse_offset",
    "parse_song_id",
]
