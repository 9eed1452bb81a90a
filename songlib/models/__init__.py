"""Wire-level data transfer objects."""

from .dto import (
    SongInfo,
    SongAddRequest,
    SongAddResponse,
    SongUpdateRequest,
    SongLyricsResponse,
    SongDetail,
)

__all__ = [
    "SongInfo",
    "SongAddRequest",
    "SongAddResponse",
    "SongUpdateRequest",
    "SongLyricsResponse",
    "SongDetail",
]
