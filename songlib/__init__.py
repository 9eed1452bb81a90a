"""Song library: paginated song catalog with verse-addressable lyrics."""

__version__ = "1.0.0"
