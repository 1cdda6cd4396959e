"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DuplicatePolicy(str, Enum):
    """How icons sharing one canonical name are written to the sprite."""

    KEEP_FIRST = "keep-first"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class FigmaSettings:
    """Figma REST API connectivity configuration."""

    token: str
    file_id: str
    timeout_seconds: int
    retries: int
    parallelism: int


@dataclass(frozen=True)
class IconSourceSettings:
    """Where the icons live inside the Figma file and how they are selected."""

    page: str
    prefix: str
    page_fetch_depth: int | None
    track_removed: bool
    duplicate_policy: DuplicatePolicy


@dataclass(frozen=True)
class OutputSettings:
    """Destination paths for generated artifacts."""

    sprite_path: Path
    typings_path: Path
    type_name: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    figma: FigmaSettings
    icons: IconSourceSettings
    output: OutputSettings
