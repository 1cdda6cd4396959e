"""Duplicate and removed icon detection service."""

from __future__ import annotations

from collections.abc import Sequence

from figma_icon_sprite.configuration.runtime_settings import DuplicatePolicy
from figma_icon_sprite.icon_discovery.icon_models import IconCandidate

from .analysis_outcomes import IconSetReport, SymbolAssignment


def find_duplicates(candidates: Sequence[IconCandidate]) -> tuple[str, ...]:
    """Return each canonical name used more than once, in first-repeat order.

    Empty names are left to `find_unnamed`.
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for candidate in candidates:
        name = candidate.canonical_name
        if not name:
            continue
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    return tuple(duplicates)


def find_removed(
    candidates: Sequence[IconCandidate], manifest: Sequence[str] | None
) -> tuple[str, ...]:
    """Return manifest names missing from the current candidates, in manifest order."""
    if manifest is None:
        return ()
    current = {candidate.canonical_name for candidate in candidates}
    return tuple(name for name in manifest if name not in current)


def find_unnamed(candidates: Sequence[IconCandidate]) -> tuple[str, ...]:
    """Return raw names of candidates whose canonical name comes out empty."""
    return tuple(candidate.raw_name for candidate in candidates if not candidate.canonical_name)


def analyze_icon_set(
    candidates: Sequence[IconCandidate], manifest: Sequence[str] | None
) -> IconSetReport:
    return IconSetReport(
        duplicates=find_duplicates(candidates),
        removed=find_removed(candidates, manifest),
        unnamed=find_unnamed(candidates),
    )


def assign_symbol_ids(
    candidates: Sequence[IconCandidate], policy: DuplicatePolicy
) -> tuple[SymbolAssignment, ...]:
    """Choose a unique sprite symbol id for every candidate that gets exported.

    The first candidate carrying a canonical name always keeps it. Later ones
    are dropped under `keep-first` and renamed `<name>-2`, `<name>-3`, ... under
    `suffix`, skipping any suffixed name another icon already uses. Candidates
    without a canonical name are never exported.
    """
    canonical_names = {candidate.canonical_name for candidate in candidates}
    taken: set[str] = set()
    assignments: list[SymbolAssignment] = []
    for candidate in candidates:
        name = candidate.canonical_name
        if not name:
            continue
        if name not in taken:
            symbol_id = name
        elif policy is DuplicatePolicy.SUFFIX:
            symbol_id = _next_free_suffix(name, taken | canonical_names)
        else:
            continue
        taken.add(symbol_id)
        assignments.append(SymbolAssignment(candidate=candidate, symbol_id=symbol_id))
    return tuple(assignments)


def _next_free_suffix(name: str, used: set[str]) -> str:
    counter = 2
    while f"{name}-{counter}" in used:
        counter += 1
    return f"{name}-{counter}"
