"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .interactive_completion import complete_configuration, ensure_gitignored
from .loader import (
    ConfigurationError,
    ConfigurationIncompleteError,
    find_missing_settings,
    load_configuration,
)
from .runtime_settings import (
    Configuration,
    DuplicatePolicy,
    FigmaSettings,
    IconSourceSettings,
    OutputSettings,
)

__all__ = [
    "Configuration",
    "DuplicatePolicy",
    "FigmaSettings",
    "IconSourceSettings",
    "OutputSettings",
    "ConfigurationError",
    "ConfigurationIncompleteError",
    "find_missing_settings",
    "load_configuration",
    "complete_configuration",
    "ensure_gitignored",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
