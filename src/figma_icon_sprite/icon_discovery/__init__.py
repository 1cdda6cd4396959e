"""Icon discovery exports."""

from .icon_models import IconCandidate
from .name_formatting import format_icon_name, layer_group
from .tree_locator import extract_icons, find_child_by_id, locate_page, strip_decorations

__all__ = [
    "IconCandidate",
    "format_icon_name",
    "layer_group",
    "extract_icons",
    "find_child_by_id",
    "locate_page",
    "strip_decorations",
]
