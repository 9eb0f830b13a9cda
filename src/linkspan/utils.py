"""Shared utility functions used across multiple linkspan modules.

Provides:
  - linkspan_dir(): resolve config directory from LINKSPAN_DIR env var.
  - utf16_len(): length of a string in UTF-16 code units.
  - utf16_to_index(): map a UTF-16 offset back to a Python string index.

Bot API entity offsets and lengths are counted in UTF-16 code units, while
everything inside linkspan works with Python string indices.
"""

import os
from pathlib import Path

LINKSPAN_DIR_ENV = "LINKSPAN_DIR"


def linkspan_dir() -> Path:
    """Resolve config directory from LINKSPAN_DIR env var or default ~/.linkspan."""
    raw = os.environ.get(LINKSPAN_DIR_ENV, "")
    return Path(raw) if raw else Path.home() / ".linkspan"


def utf16_len(text: str) -> int:
    """Length in UTF-16 code units (Telegram entity offsets use this)."""
    return len(text.encode("utf-16-le")) // 2


def utf16_to_index(text: str, offset: int) -> int:
    """Convert a UTF-16 code unit offset into an index into *text*.

    An offset pointing into the middle of a surrogate pair snaps forward to
    the next character. Offsets past the end clamp to ``len(text)``.
    """
    units = 0
    for index, char in enumerate(text):
        if units >= offset:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)
