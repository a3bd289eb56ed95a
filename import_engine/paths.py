"""
import_engine.paths - Location path keys.

A location's key is its ancestor names, root first, joined by "/".
Segments are not escaped: a name containing "/" produces a key that
collides with a deeper path.
"""

from __future__ import annotations

from typing import Sequence

SEPARATOR = "/"


def serialize_location(segments: Sequence[str]) -> str:
    """["Garage", "Shelf 2"] → "Garage/Shelf 2"."""
    return SEPARATOR.join(segments)


def split_location(raw: str) -> list[str]:
    """Inverse of serialize_location for sheet cells; blank segments dropped."""
    return [s.strip() for s in raw.split(SEPARATOR) if s.strip()]
