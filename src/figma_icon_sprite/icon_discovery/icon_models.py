"""Icon discovery entities."""

from __future__ import annotations

from dataclasses import dataclass

from figma_icon_sprite.figma_api.document_nodes import DocumentNode

from .name_formatting import format_icon_name


@dataclass(frozen=True)
class IconCandidate:
    """A document node selected as one icon by the prefix convention."""

    node: DocumentNode

    @property
    def node_id(self) -> str:
        return self.node.id

    @property
    def raw_name(self) -> str:
        return self.node.name

    @property
    def canonical_name(self) -> str:
        return format_icon_name(self.node.name)
