"""Manifest and typings writing exports."""

from .manifest_store import (
    FileManifestStore,
    InMemoryManifestStore,
    ManifestError,
    ManifestStore,
    manifest_path_for,
    write_manifest,
)
from .typings_writer import (
    DEFAULT_TYPE_NAME,
    TypingsError,
    render_type_declaration,
    write_type_declaration,
)

__all__ = [
    "FileManifestStore",
    "InMemoryManifestStore",
    "ManifestError",
    "ManifestStore",
    "manifest_path_for",
    "write_manifest",
    "DEFAULT_TYPE_NAME",
    "TypingsError",
    "render_type_declaration",
    "write_type_declaration",
]
