"""Sync execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from figma_icon_sprite.icon_set_analysis.analysis_outcomes import IconSetReport


@dataclass(frozen=True)
class SyncRequest:
    """Input contract for one icon sync run."""

    config_path: str
    dry_run: bool = False


@dataclass(frozen=True)
class SyncOutcome:
    """Output contract for one completed icon sync run."""

    sprite_path: Path
    typings_path: Path
    manifest_path: Path | None
    icon_names: tuple[str, ...]
    report: IconSetReport
    dry_run: bool

    @property
    def icon_count(self) -> int:
        return len(self.icon_names)


@dataclass(frozen=True)
class SyncArtifacts:
    """Generated content held in memory until every output can be written."""

    sprite: str
    icon_names: tuple[str, ...]
    manifest_names: tuple[str, ...]
