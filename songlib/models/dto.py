#!/usr/bin/env python
"""
Pydantic DTOs for the library's wire formats.

Field names follow the JSON the API exchanges (``song``, ``group``,
``releaseDate``); the Python attributes use snake_case aliases.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SongInfo(BaseModel):
    """One catalog entry as returned by listing and update endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str = Field(alias="song")
    group: str
    release_date: str = Field(alias="releaseDate")
    link: str = ""


class SongAddRequest(BaseModel):
    song: str = ""
    group: str = ""


class SongAddResponse(BaseModel):
    id: int


class SongUpdateRequest(BaseModel):
    """Partial update; every field that is omitted (or null) is left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, alias="song")
    group: Optional[str] = None
    release_date: Optional[str] = Field(default=None, alias="releaseDate")
    link: Optional[str] = None


class SongLyricsResponse(BaseModel):
    lyrics: str


class SongDetail(BaseModel):
    """Payload of the external song detail service."""

    model_config = ConfigDict(populate_by_name=True)

    release_date: str = Field(alias="releaseDate")
    # The service may send null for either; treated as empty
    link: Optional[str] = ""
    text: Optional[str] = ""


__all__ = [
    "SongInfo",
    "SongAddRequest",
    "SongAddResponse",
    "SongUpdateRequest",
    "SongLyricsResponse",
    "SongDetail",
]
