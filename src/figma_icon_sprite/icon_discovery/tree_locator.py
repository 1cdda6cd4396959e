"""Icon page lookup and icon node extraction."""

from __future__ import annotations

import re

from figma_icon_sprite.figma_api.document_nodes import DocumentNode

from .icon_models import IconCandidate
from .name_formatting import layer_group

# Copyright/registered marks, general punctuation through CJK symbols, the emoji
# presentation selector and the supplementary pictograph planes.
_DECORATION_CHARACTERS = re.compile("[\u00a9\u00ae\u2000-\u3300\ufe0f\U0001f000-\U0001ffff]")


def strip_decorations(name: str) -> str:
    """Remove decorative glyphs (emoji, symbols, marks) from a page name."""
    return _DECORATION_CHARACTERS.sub("", name).strip()


def locate_page(tree: DocumentNode, target_name: str) -> DocumentNode | None:
    """Return the first top-level child whose undecorated name equals `target_name`."""
    for child in tree.children:
        if strip_decorations(child.name) == target_name:
            return child
    return None


def find_child_by_id(tree: DocumentNode, node_id: str) -> DocumentNode | None:
    for child in tree.children:
        if child.id == node_id:
            return child
    return None


def extract_icons(container: DocumentNode, prefix: str) -> tuple[IconCandidate, ...]:
    """Select the container's immediate children whose layer group equals `prefix`."""
    return tuple(
        IconCandidate(node=child)
        for child in container.children
        if layer_group(child.name) == prefix
    )
