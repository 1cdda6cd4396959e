"""Icon set analysis entities."""

from __future__ import annotations

from dataclasses import dataclass

from figma_icon_sprite.icon_discovery.icon_models import IconCandidate


@dataclass(frozen=True)
class IconSetReport:
    """Advisory findings about one batch of icon candidates."""

    duplicates: tuple[str, ...]
    removed: tuple[str, ...]
    unnamed: tuple[str, ...]

    @property
    def has_findings(self) -> bool:
        return bool(self.duplicates or self.removed or self.unnamed)


@dataclass(frozen=True)
class SymbolAssignment:
    """Sprite symbol id chosen for one icon candidate."""

    candidate: IconCandidate
    symbol_id: str
