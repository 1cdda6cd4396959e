"""Icon sync use-case service."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from figma_icon_sprite.configuration import ConfigurationError, load_configuration
from figma_icon_sprite.configuration.runtime_settings import Configuration, FigmaSettings
from figma_icon_sprite.figma_api import DocumentNode, FigmaApi, FigmaApiError, FigmaClient
from figma_icon_sprite.icon_discovery import (
    IconCandidate,
    extract_icons,
    find_child_by_id,
    locate_page,
)
from figma_icon_sprite.icon_set_analysis import (
    IconSetReport,
    analyze_icon_set,
    assign_symbol_ids,
)
from figma_icon_sprite.manifest_writing import (
    FileManifestStore,
    ManifestError,
    ManifestStore,
    manifest_path_for,
    render_type_declaration,
    write_manifest,
)
from figma_icon_sprite.render_fetching import RenderFetchCoordinator, RenderFetchError
from figma_icon_sprite.sprite_building import (
    SvgNormalizationError,
    assemble_sprite,
    normalize_svg,
)

from .sync_contracts import SyncArtifacts, SyncOutcome, SyncRequest

logger = logging.getLogger(__name__)

ClientFactory = Callable[[FigmaSettings], FigmaApi]


class SyncExecutionError(Exception):
    """Raised when an icon sync run cannot be completed."""


class PageNotFoundError(SyncExecutionError):
    """Raised when the configured icon page does not exist in the Figma file."""


class NoIconsExtractedError(SyncExecutionError):
    """Raised when the icon page holds no layer matching the icon prefix."""


class OutputWriteError(SyncExecutionError):
    """Raised when one of the generated files cannot be written."""


def execute_icon_sync(
    request: SyncRequest,
    *,
    client_factory: ClientFactory | None = None,
    manifest_store: ManifestStore | None = None,
) -> SyncOutcome:
    """Execute one full Figma-to-sprite sync run and return its outcome.

    Nothing is written unless every remote call, download and SVG rewrite
    succeeded.
    """
    configuration = _load(request.config_path)
    resolved_client_factory = client_factory or FigmaClient
    client = resolved_client_factory(configuration.figma)
    store = _resolve_manifest_store(configuration, manifest_store)

    try:
        candidates = _discover_icons(client, configuration)
        report = analyze_icon_set(candidates, _read_manifest(store))
        _log_report(report)
        artifacts = _build_artifacts(client, configuration, candidates)
    finally:
        if isinstance(client, FigmaClient):
            client.close()

    if not request.dry_run:
        _write_outputs(configuration, artifacts, store)
    return SyncOutcome(
        sprite_path=configuration.output.sprite_path,
        typings_path=configuration.output.typings_path,
        manifest_path=store.path if isinstance(store, FileManifestStore) else None,
        icon_names=artifacts.icon_names,
        report=report,
        dry_run=request.dry_run,
    )


def _load(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise SyncExecutionError(str(exc)) from exc


def _resolve_manifest_store(
    configuration: Configuration, manifest_store: ManifestStore | None
) -> ManifestStore | None:
    if not configuration.icons.track_removed:
        return None
    if manifest_store is not None:
        return manifest_store
    return FileManifestStore(manifest_path_for(configuration.output.typings_path))


def _discover_icons(client: FigmaApi, configuration: Configuration) -> tuple[IconCandidate, ...]:
    file_id = configuration.figma.file_id
    depth = configuration.icons.page_fetch_depth
    logger.info("Fetching Figma file pages")
    try:
        document = client.get_document(file_id, depth=1 if depth is not None else None)
    except FigmaApiError as exc:
        raise SyncExecutionError(str(exc)) from exc

    page = locate_page(document, configuration.icons.page)
    if page is None:
        raise PageNotFoundError(f"Page {configuration.icons.page} not found")

    container = page if depth is None else _fetch_page_subtree(client, file_id, page, depth)
    candidates = extract_icons(container, configuration.icons.prefix)
    if not candidates:
        raise NoIconsExtractedError(f"Icons not found on page {configuration.icons.page}")
    logger.info("Found %d icons on page %s", len(candidates), page.name)
    return candidates


def _fetch_page_subtree(
    client: FigmaApi, file_id: str, page: DocumentNode, depth: int
) -> DocumentNode:
    logger.info("Fetching Figma file icons")
    try:
        page_tree = client.get_document(file_id, depth=depth, ids=[page.id])
    except FigmaApiError as exc:
        raise SyncExecutionError(str(exc)) from exc
    container = find_child_by_id(page_tree, page.id)
    if container is None:
        raise PageNotFoundError(f"Page {page.name} disappeared while fetching its icons")
    return container


def _read_manifest(store: ManifestStore | None) -> tuple[str, ...] | None:
    if store is None:
        return None
    try:
        return store.read()
    except ManifestError as exc:
        raise SyncExecutionError(str(exc)) from exc


def _log_report(report: IconSetReport) -> None:
    if report.duplicates:
        logger.warning("Found duplicates for icons: %s", ", ".join(report.duplicates))
    if report.removed:
        logger.warning("Deleted icons: %s", ", ".join(report.removed))
    if report.unnamed:
        logger.warning("Skipped icons without a usable name: %s", ", ".join(report.unnamed))


def _build_artifacts(
    client: FigmaApi, configuration: Configuration, candidates: tuple[IconCandidate, ...]
) -> SyncArtifacts:
    assignments = assign_symbol_ids(candidates, configuration.icons.duplicate_policy)
    if not assignments:
        raise NoIconsExtractedError(
            f"No icon on page {configuration.icons.page} has a usable name"
        )

    coordinator = RenderFetchCoordinator(client, parallelism=configuration.figma.parallelism)
    try:
        logger.info("Fetching icons from figma")
        render_urls = coordinator.fetch_render_urls(
            configuration.figma.file_id,
            [assignment.candidate.node_id for assignment in assignments],
        )
        rendered = coordinator.download_all(assignments, render_urls)
        symbols = [normalize_svg(icon.svg_text, icon.symbol_id) for icon in rendered]
    except (RenderFetchError, SvgNormalizationError) as exc:
        raise SyncExecutionError(str(exc)) from exc

    canonical_names = [candidate.canonical_name for candidate in candidates]
    return SyncArtifacts(
        sprite=assemble_sprite(symbols),
        icon_names=tuple(assignment.symbol_id for assignment in assignments),
        manifest_names=tuple(dict.fromkeys(name for name in canonical_names if name)),
    )


def _write_outputs(
    configuration: Configuration, artifacts: SyncArtifacts, store: ManifestStore | None
) -> None:
    """Write sprite and typings together, then the manifest.

    Both files are staged next to their targets and only moved into place once
    both were written, so a failed write leaves the previous outputs and the
    manifest untouched.
    """
    output = configuration.output
    typings = render_type_declaration(artifacts.icon_names, output.type_name)
    pending = ((output.sprite_path, artifacts.sprite), (output.typings_path, typings))
    staged: list[Path] = []
    try:
        for target, text in pending:
            target.parent.mkdir(parents=True, exist_ok=True)
            staging = _staging_path(target)
            staged.append(staging)
            staging.write_text(text, encoding="utf-8")
        os.replace(staged[0], output.sprite_path)
        os.replace(staged[1], output.typings_path)
        if store is not None:
            write_manifest(artifacts.manifest_names, store)
    except OSError as exc:
        for staging in staged:
            staging.unlink(missing_ok=True)
        raise OutputWriteError(f"Failed to write output: {exc}") from exc
    logger.info("Wrote %d icons to %s", len(artifacts.icon_names), output.sprite_path)


def _staging_path(target: Path) -> Path:
    return target.with_name(f".{target.name}.partial")
