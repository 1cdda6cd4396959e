"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    Configuration,
    DuplicatePolicy,
    FigmaSettings,
    IconSourceSettings,
    OutputSettings,
)

PLACEHOLDER_VALUES = frozenset({"<REQUIRED>", "<OPTIONAL>"})

REQUIRED_SETTINGS: tuple[tuple[str, str], ...] = (
    ("figma", "token"),
    ("figma", "file_id"),
    ("icons", "page"),
    ("icons", "prefix"),
    ("output", "sprite_path"),
    ("output", "typings_path"),
)

DEFAULT_PAGE_FETCH_DEPTH = 2
MIN_PAGE_FETCH_DEPTH = 2


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


class ConfigurationIncompleteError(ConfigurationError):
    """Raised when required settings are missing from the configuration file."""

    def __init__(self, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(f"Missing required configuration values: {', '.join(missing)}")


def read_raw_configuration(config_path: Path | str) -> dict[str, Any]:
    """Parse the configuration file into a plain mapping without validating it."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return _strip_placeholders(parsed)


def find_missing_settings(raw: Mapping[str, Any]) -> tuple[str, ...]:
    """Return dotted keys of required settings that are absent or blank."""
    missing = []
    for section_name, key in REQUIRED_SETTINGS:
        section = raw.get(section_name)
        value = section.get(key) if isinstance(section, Mapping) else None
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(f"{section_name}.{key}")
    return tuple(missing)


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    parsed = read_raw_configuration(path)

    missing = find_missing_settings(parsed)
    if missing:
        raise ConfigurationIncompleteError(missing)

    figma = _parse_figma_section(parsed.get("figma"))
    icons = _parse_icons_section(parsed.get("icons"))
    output = _parse_output_section(parsed.get("output"), path.parent)

    return Configuration(path=path, figma=figma, icons=icons, output=output)


def _parse_figma_section(value: Any) -> FigmaSettings:
    section = _require_mapping(value, "figma")
    token = _require_non_empty_string(section.get("token"), "figma.token")
    file_id = _require_non_empty_string(section.get("file_id"), "figma.file_id")
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 30), "figma.timeout_seconds"
    )
    retries = _require_non_negative_int(section.get("retries", 0), "figma.retries")
    parallelism = _require_positive_int(section.get("parallelism", 8), "figma.parallelism")
    return FigmaSettings(
        token=token,
        file_id=file_id,
        timeout_seconds=timeout_seconds,
        retries=retries,
        parallelism=parallelism,
    )


def _parse_icons_section(value: Any) -> IconSourceSettings:
    section = _require_mapping(value, "icons")
    page = _require_non_empty_string(section.get("page"), "icons.page")
    prefix = _require_non_empty_string(section.get("prefix"), "icons.prefix")
    depth_raw = section.get("page_fetch_depth", DEFAULT_PAGE_FETCH_DEPTH)
    page_fetch_depth = None if depth_raw is None else _parse_page_fetch_depth(depth_raw)
    track_removed = _require_bool(section.get("track_removed", True), "icons.track_removed")
    duplicate_policy = _parse_duplicate_policy(section.get("duplicate_policy"))
    return IconSourceSettings(
        page=page,
        prefix=prefix,
        page_fetch_depth=page_fetch_depth,
        track_removed=track_removed,
        duplicate_policy=duplicate_policy,
    )


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _require_mapping(value, "output")
    sprite_path = _require_non_empty_string(section.get("sprite_path"), "output.sprite_path")
    typings_path = _require_non_empty_string(section.get("typings_path"), "output.typings_path")
    type_name = _require_non_empty_string(section.get("type_name", "iconTypes"), "output.type_name")
    if not type_name.isidentifier():
        raise ConfigurationError(f"output.type_name '{type_name}' is not a valid identifier.")
    resolved_sprite = _resolve_path(base_path, sprite_path)
    resolved_typings = _resolve_path(base_path, typings_path)
    if resolved_sprite == resolved_typings:
        raise ConfigurationError("output.sprite_path and output.typings_path must differ.")
    return OutputSettings(
        sprite_path=resolved_sprite,
        typings_path=resolved_typings,
        type_name=type_name,
    )


def _parse_duplicate_policy(value: Any) -> DuplicatePolicy:
    if value is None:
        return DuplicatePolicy.KEEP_FIRST
    raw = _require_non_empty_string(value, "icons.duplicate_policy").lower()
    try:
        return DuplicatePolicy(raw)
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in DuplicatePolicy)
        raise ConfigurationError(
            f"icons.duplicate_policy must be one of: {allowed}."
        ) from exc


def _strip_placeholders(value: Mapping[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, item in value.items():
        if isinstance(item, str) and item.strip() in PLACEHOLDER_VALUES:
            continue
        cleaned[key] = _strip_placeholders(item) if isinstance(item, Mapping) else item
    return cleaned


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path).expanduser()
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _parse_page_fetch_depth(value: Any) -> int:
    depth = _require_positive_int(value, "icons.page_fetch_depth")
    if depth < MIN_PAGE_FETCH_DEPTH:
        raise ConfigurationError(
            f"icons.page_fetch_depth must be at least {MIN_PAGE_FETCH_DEPTH} "
            "to include the icons below the page, or null to fetch the whole file."
        )
    return depth


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
