"""Figma document tree entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DocumentNode:
    """One node of a fetched Figma document snapshot."""

    id: str
    name: str
    children: tuple[DocumentNode, ...] = field(default_factory=tuple)
    type: str | None = None

    @staticmethod
    def from_payload(payload: Mapping[str, Any]) -> DocumentNode:
        """Build a node tree from the JSON object returned by the files endpoint."""
        children = payload.get("children") or ()
        return DocumentNode(
            id=str(payload.get("id", "")),
            name=str(payload.get("name", "")),
            children=tuple(DocumentNode.from_payload(child) for child in children),
            type=payload.get("type"),
        )
