"""Canonical icon name derivation."""

from __future__ import annotations

import re

LAYER_GROUP_SEPARATOR = "/"

_DISALLOWED_CHARACTERS = re.compile(r"[^A-Za-z0-9\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s-]+")


def format_icon_name(raw_name: str) -> str:
    """Derive the canonical icon name from a raw Figma layer name.

    `"Icon / Arrow Right"` becomes `"arrow-right"`: the leading layer group is
    dropped when the name has more than one segment, the remaining segments are
    trimmed and joined, everything but ASCII letters, digits, whitespace and
    hyphens is removed, and whitespace/hyphen runs collapse to one hyphen.
    Applying the function to its own output returns the output unchanged.
    """
    segments = [segment.strip() for segment in raw_name.split(LAYER_GROUP_SEPARATOR)]
    if len(segments) > 1:
        segments = segments[1:]
    filtered = _DISALLOWED_CHARACTERS.sub("", " ".join(segments))
    return _SEPARATOR_RUNS.sub("-", filtered).strip("-").lower()


def layer_group(raw_name: str) -> str:
    """Return the trimmed first `/` segment of a layer name."""
    return raw_name.split(LAYER_GROUP_SEPARATOR, 1)[0].strip()
