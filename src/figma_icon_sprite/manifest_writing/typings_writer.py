"""TypeScript icon name union generation."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

DEFAULT_TYPE_NAME = "iconTypes"


class TypingsError(Exception):
    """Raised when a type declaration cannot be generated."""


def render_type_declaration(names: Sequence[str], type_name: str = DEFAULT_TYPE_NAME) -> str:
    """Render `export type <name> = 'a' | 'b';` with one literal per line, in input order."""
    if not names:
        raise TypingsError("Cannot declare an icon type without icon names.")
    literals = " |\n".join(f"  '{_escape_literal(name)}'" for name in names)
    return f"export type {type_name} =\n{literals};"


def write_type_declaration(
    names: Sequence[str], path: Path | str, type_name: str = DEFAULT_TYPE_NAME
) -> Path:
    """Render the declaration and overwrite `path` with it."""
    declaration = render_type_declaration(names, type_name)
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(declaration, encoding="utf-8")
    return destination


def _escape_literal(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")
