"""Persistence of the icon name manifest used to detect removed icons."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol


class ManifestError(Exception):
    """Raised when a stored manifest cannot be read back."""


class ManifestStore(Protocol):
    """Storage for the canonical names written by the previous successful run."""

    def read(self) -> tuple[str, ...] | None: ...

    def write(self, names: Sequence[str]) -> None: ...


def manifest_path_for(typings_path: Path | str) -> Path:
    """Return the hidden `.<typings stem>.json` sidecar next to the typings file."""
    typings = Path(typings_path)
    return typings.parent / f".{typings.stem}.json"


class FileManifestStore:
    """Manifest kept as a JSON array in a file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def read(self) -> tuple[str, ...] | None:
        if not self.path.exists():
            return None
        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Icon manifest is not valid JSON: {self.path}") from exc
        if not isinstance(parsed, list) or not all(isinstance(item, str) for item in parsed):
            raise ManifestError(f"Icon manifest must be a JSON array of strings: {self.path}")
        return tuple(parsed)

    def write(self, names: Sequence[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(list(names)), encoding="utf-8")


class InMemoryManifestStore:
    """Manifest kept in memory, for tests and embedding callers."""

    def __init__(self, names: Sequence[str] | None = None) -> None:
        self.names: tuple[str, ...] | None = tuple(names) if names is not None else None

    def read(self) -> tuple[str, ...] | None:
        return self.names

    def write(self, names: Sequence[str]) -> None:
        self.names = tuple(names)


def write_manifest(names: Sequence[str], store: ManifestStore) -> None:
    """Replace the stored manifest with `names`."""
    store.write(names)
