"""Interactive completion of missing configuration values."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from .loader import ConfigurationError, find_missing_settings, read_raw_configuration

Prompt = Callable[[str, str | None], str]

_PROMPT_LABELS: dict[str, tuple[str, str | None]] = {
    "figma.token": ("Figma API token", None),
    "figma.file_id": ("Figma file ID", None),
    "icons.page": ("Figma page name", "Page 1"),
    "icons.prefix": ("Icon prefix", "Icon"),
    "output.sprite_path": ("Icons sprite file path", "icons.svg"),
    "output.typings_path": ("Icon typings file path", None),
}


def complete_configuration(config_path: Path | str, prompt: Prompt) -> tuple[str, ...]:
    """Prompt for every missing required value and persist the answers.

    The configuration file is created when it does not exist yet. Because the
    file carries the API token, its name is appended to a sibling `.gitignore`
    when one exists.

    The answers are saved by re-serializing the whole file: a `.json` path
    stays JSON, anything else is written as YAML. Comments in the original
    file, such as the scaffold guidance, are not preserved.

    Args:
      config_path: Configuration file to read and rewrite.
      prompt: Callable receiving a label and an optional default and returning the answer.

    Returns:
      The dotted keys that were prompted for.
    """
    path = Path(config_path)
    raw: dict[str, Any] = read_raw_configuration(path) if path.exists() else {}
    missing = find_missing_settings(raw)
    if not missing:
        return ()

    for dotted_key in missing:
        label, default = _PROMPT_LABELS[dotted_key]
        answer = prompt(label, default).strip()
        if not answer:
            raise ConfigurationError(f"{dotted_key} must not be empty.")
        section_name, key = dotted_key.split(".", 1)
        section = raw.get(section_name)
        if not isinstance(section, dict):
            section = {}
            raw[section_name] = section
        section[key] = answer

    path.write_text(_serialize(raw, path), encoding="utf-8")
    ensure_gitignored(path)
    return missing


def ensure_gitignored(config_path: Path) -> bool:
    """Append the configuration file name to a sibling `.gitignore` if it is not listed."""
    gitignore = config_path.parent / ".gitignore"
    if not gitignore.exists():
        return False
    entry = config_path.name
    content = gitignore.read_text(encoding="utf-8")
    listed = {line.strip().lstrip("/") for line in content.splitlines()}
    if entry in listed:
        return False
    separator = "" if not content or content.endswith("\n") else "\n"
    gitignore.write_text(f"{content}{separator}{entry}\n", encoding="utf-8")
    return True


def _serialize(raw: dict[str, Any], path: Path) -> str:
    if path.suffix.lower() == ".json":
        return json.dumps(raw, indent=2) + "\n"
    return yaml.safe_dump(raw, sort_keys=False)
