"""Tests for the icon sync use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest
from figma_icon_sprite.configuration.runtime_settings import FigmaSettings
from figma_icon_sprite.figma_api.document_nodes import DocumentNode
from figma_icon_sprite.figma_api.rest_client import FigmaApiError
from figma_icon_sprite.manifest_writing.manifest_store import InMemoryManifestStore
from figma_icon_sprite.sync_execution.icon_sync_use_case import (
    NoIconsExtractedError,
    OutputWriteError,
    PageNotFoundError,
    SyncExecutionError,
    execute_icon_sync,
)
from figma_icon_sprite.sync_execution.sync_contracts import SyncRequest


def _svg(label: str) -> str:
    return (
        f'<svg width="24" height="24" viewBox="0 0 24 24" fill="none" '
        f'xmlns="http://www.w3.org/2000/svg"><path d="{label}" fill="#000"/></svg>\n'
    )


class FakeFigmaClient:
    """In-memory Figma file with a decorated icon page."""

    def __init__(
        self,
        icon_names: Sequence[str] = ("Icon/Arrow Right", "Icon/Close", "Logo/Brand"),
        *,
        page_name: str = "🎨 Icons",
        fail_download_for: Sequence[str] = (),
    ) -> None:
        self.icons = tuple(
            DocumentNode(id=f"2:{index}", name=name) for index, name in enumerate(icon_names)
        )
        self.page_name = page_name
        self.fail_download_for = set(fail_download_for)
        self.document_calls: list[tuple[int | None, tuple[str, ...] | None]] = []
        self.image_calls: list[tuple[str, ...]] = []

    def get_document(self, file_id, *, depth=None, ids=None) -> DocumentNode:
        self.document_calls.append((depth, tuple(ids) if ids else None))
        cover = DocumentNode(id="1:0", name="Cover")
        if depth == 1:
            page = DocumentNode(id="1:1", name=self.page_name)
        else:
            page = DocumentNode(id="1:1", name=self.page_name, children=self.icons)
        if ids:
            return DocumentNode(id="0:0", name="Document", children=(page,))
        return DocumentNode(id="0:0", name="Document", children=(cover, page))

    def get_image_urls(
        self, file_id: str, node_ids: Sequence[str], image_format: str = "svg"
    ) -> Mapping[str, str | None]:
        self.image_calls.append(tuple(node_ids))
        return {node_id: f"https://render/{node_id}" for node_id in node_ids}

    def download_text(self, url: str) -> str:
        node_id = url.rsplit("/", 1)[-1]
        if node_id in self.fail_download_for:
            raise FigmaApiError(f"Download failed for {url}: HTTP 500", status_code=500)
        return _svg(node_id)


def _write_config(tmp_path: Path, **icons_overrides) -> Path:
    config = {
        "figma": {"token": "figd_secret", "file_id": "FILE", "parallelism": 2},
        "icons": {"page": "Icons", "prefix": "Icon", **icons_overrides},
        "output": {"sprite_path": "public/icons.svg", "typings_path": "src/icon-types.ts"},
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def _factory(client: FakeFigmaClient):
    def create(settings: FigmaSettings) -> FakeFigmaClient:
        assert settings.token == "figd_secret"
        return client

    return create


def test_execute_icon_sync_writes_sprite_typings_and_manifest(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    client = FakeFigmaClient()

    outcome = execute_icon_sync(
        SyncRequest(config_path=str(config_path)), client_factory=_factory(client)
    )

    assert outcome.icon_names == ("arrow-right", "close")
    assert outcome.icon_count == 2
    assert outcome.dry_run is False
    sprite = outcome.sprite_path.read_text(encoding="utf-8")
    assert '<symbol id="arrow-right" viewBox="0 0 24 24"' in sprite
    assert '<path d="2:0" fill="#000"/>' in sprite
    assert sprite.index('id="arrow-right"') < sprite.index('id="close"')
    assert outcome.typings_path.read_text(encoding="utf-8") == (
        "export type iconTypes =\n  'arrow-right' |\n  'close';"
    )
    assert outcome.manifest_path == (tmp_path / "src" / ".icon-types.json").resolve()
    assert json.loads(outcome.manifest_path.read_text(encoding="utf-8")) == [
        "arrow-right",
        "close",
    ]
    assert client.document_calls == [(1, None), (2, ("1:1",))]
    assert client.image_calls == [("2:0", "2:1")]


def test_execute_icon_sync_single_stage_fetch_reads_whole_document(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, page_fetch_depth=None)
    client = FakeFigmaClient()

    outcome = execute_icon_sync(
        SyncRequest(config_path=str(config_path)), client_factory=_factory(client)
    )

    assert client.document_calls == [(None, None)]
    assert outcome.icon_names == ("arrow-right", "close")


def test_execute_icon_sync_page_not_found_writes_nothing(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    client = FakeFigmaClient(page_name="Icons v2")

    with pytest.raises(PageNotFoundError, match="Page Icons not found"):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)), client_factory=_factory(client)
        )

    assert not (tmp_path / "public").exists()
    assert not (tmp_path / "src").exists()


def test_execute_icon_sync_without_matching_icons_fails(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    client = FakeFigmaClient(icon_names=("Logo/Brand", "icon/lowercase"))

    with pytest.raises(NoIconsExtractedError, match="Icons not found on page Icons"):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)), client_factory=_factory(client)
        )

    assert not (tmp_path / "public").exists()


def test_execute_icon_sync_all_or_nothing_when_one_download_fails(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    client = FakeFigmaClient(
        icon_names=tuple(f"Icon/Glyph {index}" for index in range(5)),
        fail_download_for=["2:3"],
    )
    store = InMemoryManifestStore(["glyph-0"])

    with pytest.raises(SyncExecutionError, match="glyph-3"):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)),
            client_factory=_factory(client),
            manifest_store=store,
        )

    assert not (tmp_path / "public" / "icons.svg").exists()
    assert not (tmp_path / "src" / "icon-types.ts").exists()
    assert store.read() == ("glyph-0",)


def test_execute_icon_sync_reports_duplicates_and_removed_icons(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config_path = _write_config(tmp_path)
    client = FakeFigmaClient(icon_names=("Icon/A", "Icon/ A ", "Icon/C"))
    store = InMemoryManifestStore(["a", "b", "c"])

    with caplog.at_level(logging.WARNING, logger="figma_icon_sprite"):
        outcome = execute_icon_sync(
            SyncRequest(config_path=str(config_path)),
            client_factory=_factory(client),
            manifest_store=store,
        )

    assert outcome.report.duplicates == ("a",)
    assert outcome.report.removed == ("b",)
    assert outcome.icon_names == ("a", "c")
    assert store.read() == ("a", "c")
    assert outcome.manifest_path is None
    assert "Found duplicates for icons: a" in caplog.text
    assert "Deleted icons: b" in caplog.text
    assert outcome.sprite_path.read_text(encoding="utf-8").count('id="a"') == 1


def test_execute_icon_sync_suffix_policy_keeps_every_duplicate(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, duplicate_policy="suffix")
    client = FakeFigmaClient(icon_names=("Icon/A", "Icon/A"))
    store = InMemoryManifestStore()

    outcome = execute_icon_sync(
        SyncRequest(config_path=str(config_path)),
        client_factory=_factory(client),
        manifest_store=store,
    )

    assert outcome.icon_names == ("a", "a-2")
    assert store.read() == ("a",)


def test_execute_icon_sync_without_removed_tracking_skips_manifest(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path, track_removed=False)
    store = InMemoryManifestStore(["gone"])

    outcome = execute_icon_sync(
        SyncRequest(config_path=str(config_path)),
        client_factory=_factory(FakeFigmaClient()),
        manifest_store=store,
    )

    assert outcome.report.removed == ()
    assert outcome.manifest_path is None
    assert store.read() == ("gone",)
    assert not (tmp_path / "src" / ".icon-types.json").exists()


def test_execute_icon_sync_dry_run_writes_nothing(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    outcome = execute_icon_sync(
        SyncRequest(config_path=str(config_path), dry_run=True),
        client_factory=_factory(FakeFigmaClient()),
    )

    assert outcome.dry_run is True
    assert outcome.icon_count == 2
    assert not outcome.sprite_path.exists()
    assert not outcome.typings_path.exists()


def test_execute_icon_sync_rejects_icons_without_usable_names(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    client = FakeFigmaClient(icon_names=("Icon/🔥", "Icon/!!"))

    with pytest.raises(NoIconsExtractedError, match="usable name"):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)), client_factory=_factory(client)
        )


def test_execute_icon_sync_wraps_configuration_errors(tmp_path: Path) -> None:
    with pytest.raises(SyncExecutionError, match="Configuration file not found"):
        execute_icon_sync(SyncRequest(config_path=str(tmp_path / "missing.yaml")))


def test_execute_icon_sync_wraps_output_write_errors(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    (tmp_path / "public").write_text("a file where a directory is expected", encoding="utf-8")

    with pytest.raises(OutputWriteError, match="Failed to write output"):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)),
            client_factory=_factory(FakeFigmaClient()),
            manifest_store=InMemoryManifestStore(),
        )


def test_execute_icon_sync_failed_sprite_write_keeps_typings_and_manifest(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    (tmp_path / "public").write_text("a file where a directory is expected", encoding="utf-8")
    typings_path = tmp_path / "src" / "icon-types.ts"
    typings_path.parent.mkdir()
    typings_path.write_text("export type iconTypes =\n  'old-icon';", encoding="utf-8")
    store = InMemoryManifestStore(["old-icon"])

    with pytest.raises(OutputWriteError):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)),
            client_factory=_factory(FakeFigmaClient()),
            manifest_store=store,
        )

    assert store.read() == ("old-icon",)
    assert typings_path.read_text(encoding="utf-8") == "export type iconTypes =\n  'old-icon';"
    assert sorted(path.name for path in typings_path.parent.iterdir()) == ["icon-types.ts"]


def test_execute_icon_sync_failed_typings_write_keeps_previous_sprite(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)
    sprite_path = tmp_path / "public" / "icons.svg"
    sprite_path.parent.mkdir()
    sprite_path.write_text("<svg>previous</svg>", encoding="utf-8")
    (tmp_path / "src").write_text("a file where a directory is expected", encoding="utf-8")
    store = InMemoryManifestStore(["old-icon"])

    with pytest.raises(OutputWriteError):
        execute_icon_sync(
            SyncRequest(config_path=str(config_path)),
            client_factory=_factory(FakeFigmaClient()),
            manifest_store=store,
        )

    assert sprite_path.read_text(encoding="utf-8") == "<svg>previous</svg>"
    assert sorted(path.name for path in sprite_path.parent.iterdir()) == ["icons.svg"]
    assert store.read() == ("old-icon",)
