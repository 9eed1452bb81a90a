"""Clients for external services."""

from .song_detail import SongDetailClient

__all__ = ["SongDetailClient"]
