"""Song library routes: paginated listings, lyric windows and song CRUD."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from songlib.catalog import (
    create_song,
    decode_cursor,
    decode_group_cursor,
    delete_song,
    get_lyrics,
    list_all,
    list_by_group,
    update_song,
)
from songlib.catalog.cursor import parse_limit, parse_offset, parse_song_id
from songlib.errors import DetailLookupError, SongLibraryError, ValidationError
from songlib.models.dto import SongAddRequest, SongAddResponse, SongLyricsResponse, SongUpdateRequest

logger = logging.getLogger(__name__)

library_bp = Blueprint('library_bp', __name__, url_prefix='/library')


def _song_page_limit() -> int:
    return parse_limit(
        request.args.get('limit'),
        default=current_app.config.get('DEFAULT_SONG_PAGE_SIZE', 10),
        maximum=current_app.config.get('MAX_PAGE_SIZE'),
    )


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError('Invalid JSON payload')
    return payload


def _detail_client():
    client = current_app.extensions.get('song_detail_client')
    if client is None:
        raise DetailLookupError('song detail client is not configured', status_code=503, reason='Service Unavailable')
    return client


@library_bp.errorhandler(SongLibraryError)
def _handle_library_error(exc: SongLibraryError):
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc)
        message = getattr(exc, 'reason', None) or 'Internal Server Error'
    else:
        message = str(exc)
    return jsonify({'error': exc.error_code, 'message': message}), exc.status_code


@library_bp.route('/songs', methods=['GET'])
def list_songs():
    """Songs in (group, title) order, resuming after prevGroup/prevSong."""
    cursor = decode_cursor(request.args.get('prevGroup'), request.args.get('prevSong'))
    songs = list_all(cursor, _song_page_limit())
    return jsonify([song.to_dict() for song in songs]), 200


@library_bp.route('/songs/<path:group>', methods=['GET'])
def list_group_songs(group: str):
    """Songs of one group in title order, resuming after prevSong."""
    cursor = decode_group_cursor(request.args.get('prevSong'))
    songs = list_by_group(group, cursor, _song_page_limit())
    return jsonify([song.to_dict() for song in songs]), 200


@library_bp.route('/song/<song_id>', methods=['GET'])
def get_song_lyrics(song_id: str):
    song_id = parse_song_id(song_id)
    offset = parse_offset(request.args.get('offset'))
    limit = parse_limit(
        request.args.get('limit'),
        default=current_app.config.get('DEFAULT_VERSE_PAGE_SIZE', 20),
        maximum=current_app.config.get('MAX_PAGE_SIZE'),
    )
    lyrics = get_lyrics(song_id, offset, limit)
    return jsonify(SongLyricsResponse(lyrics=lyrics).model_dump()), 200


@library_bp.route('/song', methods=['POST'])
def add_song():
    try:
        req = SongAddRequest.model_validate(_json_body())
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid JSON payload: {exc.errors()[0]['msg']}") from None
    if not req.song.strip() or not req.group.strip():
        raise ValidationError("Missing 'song' or 'group' field")

    detail = _detail_client().get_song_detail(req.song, req.group)
    try:
        song_id = create_song(req.song, req.group, detail.release_date, detail.link or "", detail.text or "")
    except ValidationError as exc:
        # The detail service, not the caller, supplied the bad value
        logger.error("Rejected song detail for (%r, %r): %s", req.song, req.group, exc)
        return jsonify({'error': 'invalid_song_detail', 'message': 'Internal Server Error'}), 500

    return jsonify(SongAddResponse(id=song_id).model_dump()), 201


@library_bp.route('/song/<song_id>', methods=['PUT'])
def edit_song(song_id: str):
    song_id = parse_song_id(song_id)
    try:
        changes = SongUpdateRequest.model_validate(_json_body())
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid JSON payload: {exc.errors()[0]['msg']}") from None

    song = update_song(
        song_id,
        title=changes.title,
        group=changes.group,
        release_date=changes.release_date,
        link=changes.link,
    )
    return jsonify(song.to_dict()), 200


@library_bp.route('/song/<song_id>', methods=['DELETE'])
def remove_song(song_id: str):
    delete_song(parse_song_id(song_id))
    return '', 204


__all__ = ['library_bp']
