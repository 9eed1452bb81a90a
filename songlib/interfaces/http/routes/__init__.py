"""Route blueprints exposed via Flask."""

from .library import library_bp
from .health import health_bp

__all__ = [
    "library_bp",
    "health_bp",
]
