#!/usr/bin/env python
"""Release date helpers for the fixed DD.MM.YYYY wire format."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

RELEASE_DATE_FORMAT = "%d.%m.%Y"
_RELEASE_DATE_RE = re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4}")


def parse_release_date(value: Optional[str]) -> Optional[date]:
    """Parse a zero-padded DD.MM.YYYY string; returns None when it is missing or malformed."""
    if not isinstance(value, str) or not _RELEASE_DATE_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, RELEASE_DATE_FORMAT).date()
    except ValueError:
        return None


def format_release_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    # strftime drops the padding of years before 1000 on some platforms
    return f"{value.day:02d}.{value.month:02d}.{value.year:04d}"


__all__ = ["RELEASE_DATE_FORMAT", "parse_release_date", "format_release_date"]
