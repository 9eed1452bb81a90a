"""Error taxonomy shared by the catalog core and its collaborators."""

from __future__ import annotations


class SongLibraryError(Exception):
    """Base exception for the song library."""

    status_code = 500
    error_code = "internal_error"


class ValidationError(SongLibraryError):
    """Malformed cursor, limit, offset, date or request body."""

    status_code = 400
    error_code = "invalid_request"


class SongNotFound(SongLibraryError):
    """No song exists with the requested id."""

    status_code = 404
    error_code = "song_not_found"

    def __init__(self, song_id: int) -> None:
        super().__init__(f"song {song_id} not found")
        self.song_id = song_id


class StorageError(SongLibraryError):
    """Connectivity, timeout or constraint failure in the storage layer."""

    status_code = 500
    error_code = "storage_error"


class DetailLookupError(SongLibraryError):
    """The song detail service could not resolve a (song, group) pair."""

    error_code = "detail_lookup_failed"

    def __init__(self, message: str, status_code: int = 500, reason: str = "Internal Server Error") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


__all__ = [
    "SongLibraryError",
    "ValidationError",
    "SongNotFound",
    "StorageError",
    "DetailLookupError",
]
