"""Render fetching entities."""

from __future__ import annotations

from dataclasses import dataclass

from figma_icon_sprite.icon_set_analysis.analysis_outcomes import SymbolAssignment


@dataclass(frozen=True)
class RenderedIcon:
    """Raw SVG markup downloaded for one exported icon."""

    assignment: SymbolAssignment
    render_url: str
    svg_text: str

    @property
    def symbol_id(self) -> str:
        return self.assignment.symbol_id
