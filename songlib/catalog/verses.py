"""Verse codec: lyrics blob <-> ordered verses.

A verse is a paragraph of the lyrics. Paragraphs are separated by a blank
line, so the delimiter is two consecutive newlines; single newlines stay
inside their verse.

``join_verses(split_verses(blob)) == blob`` holds for every blob. Runs of
three or more newlines are not normalized: they yield verses that start
with a newline (or are empty), and those come back verbatim on join.
"""

from __future__ import annotations

from typing import Iterable, List

VERSE_DELIMITER = "\n\n"


def split_verses(blob: str) -> List[str]:
    if not blob:
        return []
    return blob.split(VERSE_DELIMITER)


def join_verses(verses: Iterable[str]) -> str:
    return VERSE_DELIMITER.join(verses)


__all__ = ["VERSE_DELIMITER", "split_verses", "join_verses"]
