"""Catalog core: verse codec, lyric windows, cursors, pagination, mutations."""

from .verses import VERSE_DELIMITER, split_verses, join_verses
from .cursor import (
    PageCursor,
    GroupCursor,
    decode_cursor,
    decode_group_cursor,
    encode_cursor,
    encode_group_cursor,
)
from .lyrics import get_window, get_lyrics
from .pagination import list_all, list_by_group, iter_catalog
from .mutations import get_song, create_song, update_song, delete_song, clear_catalog

__all__ = [
    "VERSE_DELIMITER",
    "split_verses",
    "join_verses",
    "PageCursor",
    "GroupCursor",
    "decode_cursor",
    "decode_group_cursor",
    "encode_cursor",
    "encode_group_cursor",
    "get_window",
    "get_lyrics",
    "list_all",
    "list_by_group",
    "iter_catalog",
    "get_song",
    "create_song",
    "update_song",
    "delete_song",
    "clear_catalog",
]
