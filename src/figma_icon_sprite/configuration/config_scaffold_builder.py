"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = ".figma-icons.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Icon sync configuration for figma-icon-sprite.
# Replace every <REQUIRED> placeholder before running sync, or run sync
# interactively and answer the prompts for the missing values.
# This file holds your Figma API token: keep it out of version control.

figma:
  # Personal access token, see https://www.figma.com/developers/api#access-tokens
  token: "<REQUIRED>"
  # The FILE-ID part of https://www.figma.com/file/FILE-ID/project-name
  file_id: "<REQUIRED>"
  timeout_seconds: "<OPTIONAL>"
  retries: "<OPTIONAL>"
  # Maximum number of icons downloaded at the same time.
  parallelism: "<OPTIONAL>"

icons:
  # Page name as shown in Figma; leading emoji and symbols are ignored.
  page: "<REQUIRED>"
  # Only layers named "<prefix>/<icon name>" are exported.
  prefix: "<REQUIRED>"
  # Depth of the page-scoped fetch (2 or more); null fetches the whole file in one request.
  page_fetch_depth: "<OPTIONAL>"
  # Compare with the previous run and report icons that disappeared.
  track_removed: "<OPTIONAL>"
  # keep-first or suffix
  duplicate_policy: "<OPTIONAL>"

output:
  # Relative paths resolve against the directory of this file.
  sprite_path: "<REQUIRED>"
  typings_path: "<REQUIRED>"
  type_name: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
