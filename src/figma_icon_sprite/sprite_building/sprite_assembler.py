"""Sprite document assembly."""

from __future__ import annotations

from collections.abc import Sequence

SPRITE_ROOT_OPEN = (
    '<svg aria-hidden="true" '
    'style="position: absolute; width: 0; height: 0; overflow: hidden;" '
    'version="1.1" '
    'xmlns="http://www.w3.org/2000/svg" '
    'xmlns:xlink="http://www.w3.org/1999/xlink">'
)


def assemble_sprite(symbols: Sequence[str]) -> str:
    """Wrap symbol fragments, in order, into one hidden SVG sprite document."""
    lines = [SPRITE_ROOT_OPEN, "<defs>", *symbols, "</defs>", "</svg>"]
    return "\n".join(lines)
