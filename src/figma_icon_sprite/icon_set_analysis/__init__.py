"""Icon set analysis exports."""

from .analysis_outcomes import IconSetReport, SymbolAssignment
from .set_analyzer import (
    analyze_icon_set,
    assign_symbol_ids,
    find_duplicates,
    find_removed,
    find_unnamed,
)

__all__ = [
    "IconSetReport",
    "SymbolAssignment",
    "analyze_icon_set",
    "assign_symbol_ids",
    "find_duplicates",
    "find_removed",
    "find_unnamed",
]
