#!/usr/bin/env python
# config.py
import os
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))

DEFAULT_DATABASE_URI = 'sqlite:///' + os.path.join(basedir, 'instance', 'songlib.db')
DEFAULT_EXTERNAL_API_URL = 'http://localhost:8081'


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or DEFAULT_DATABASE_URI
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Upper bound for a single storage round trip (seconds)
    DB_TIMEOUT_SECONDS = max(1, _get_int('DB_TIMEOUT_SECONDS', 5))

    # Song detail service (release date, link, lyrics)
    EXTERNAL_API_URL = os.environ.get('EXTERNAL_API_URL') or DEFAULT_EXTERNAL_API_URL
    EXTERNAL_API_TIMEOUT_SECONDS = max(0.1, _get_float('EXTERNAL_API_TIMEOUT_SECONDS', 5.0))

    # Pagination
    DEFAULT_SONG_PAGE_SIZE = 10
    DEFAULT_VERSE_PAGE_SIZE = 20
    MAX_PAGE_SIZE = max(1, _get_int('MAX_PAGE_SIZE', 1000))

    # HTTP server
    SERVER_HOST = os.getenv('SERVER_HOST', '0.0.0.0')
    SERVER_PORT = _get_int('SERVER_PORT', 8080)
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', '')

    # Runtime behavior
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)

    # Observability
    OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv('OTEL_EXPORTER_OTLP_ENDPOINT')
    OTEL_EXPORTER_OTLP_HEADERS = os.getenv('OTEL_EXPORTER_OTLP_HEADERS')
    OTEL_EXPORTER_OTLP_INSECURE = _get_bool('OTEL_EXPORTER_OTLP_INSECURE', True)
    OTEL_SERVICE_NAME = os.getenv('OTEL_SERVICE_NAME', 'song-library')


def missing_settings() -> List[str]:
    """Names of environment variables that fell back to local defaults."""
    missing = []
    if not os.environ.get('DATABASE_URL'):
        missing.append('DATABASE_URL')
    if not os.environ.get('EXTERNAL_API_URL'):
        missing.append('EXTERNAL_API_URL')
    return missing
