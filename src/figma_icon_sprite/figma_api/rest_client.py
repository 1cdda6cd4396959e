"""Figma REST API client service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from figma_icon_sprite.configuration.runtime_settings import FigmaSettings

from .document_nodes import DocumentNode

FIGMA_API_BASE = "https://api.figma.com/v1"
_RETRY_STATUSES = (429, 500, 502, 503, 504)

logger = logging.getLogger(__name__)


class FigmaApiError(Exception):
    """Raised when a Figma API request or a render download fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class FigmaApi(Protocol):
    """Protocol implemented by both the real client and test fakes."""

    def get_document(
        self,
        file_id: str,
        *,
        depth: int | None = None,
        ids: Sequence[str] | None = None,
    ) -> DocumentNode: ...

    def get_image_urls(
        self, file_id: str, node_ids: Sequence[str], image_format: str = "svg"
    ) -> Mapping[str, str | None]: ...

    def download_text(self, url: str) -> str: ...


class FigmaClient:
    """Thin `requests` wrapper around the Figma files and images endpoints."""

    def __init__(
        self,
        settings: FigmaSettings,
        *,
        session: requests.Session | None = None,
        base_url: str = FIGMA_API_BASE,
    ) -> None:
        self._settings = settings
        self._base_url = base_url.rstrip("/")
        self._session = session or self._create_session(settings.retries)

    def get_document(
        self,
        file_id: str,
        *,
        depth: int | None = None,
        ids: Sequence[str] | None = None,
    ) -> DocumentNode:
        params: dict[str, Any] = {}
        if depth is not None:
            params["depth"] = depth
        if ids:
            params["ids"] = ",".join(ids)
        payload = self._get_json(f"/files/{file_id}", params)
        document = payload.get("document")
        if not isinstance(document, Mapping):
            raise FigmaApiError(f"Figma file {file_id} response has no document tree.")
        return DocumentNode.from_payload(document)

    def get_image_urls(
        self, file_id: str, node_ids: Sequence[str], image_format: str = "svg"
    ) -> Mapping[str, str | None]:
        payload = self._get_json(
            f"/images/{file_id}",
            {"ids": ",".join(node_ids), "format": image_format},
        )
        if payload.get("err"):
            raise FigmaApiError(f"Figma render request failed: {payload['err']}")
        images = payload.get("images")
        if not isinstance(images, Mapping):
            raise FigmaApiError("Figma render response has no images mapping.")
        return dict(images)

    def download_text(self, url: str) -> str:
        # Render URLs are pre-signed storage links; the API token is not sent along.
        try:
            response = self._session.get(url, timeout=self._settings.timeout_seconds)
        except requests.RequestException as exc:
            raise FigmaApiError(f"Download failed for {url}: {exc}") from exc
        if not response.ok:
            raise FigmaApiError(
                f"Download failed for {url}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        response.encoding = response.encoding or "utf-8"
        return response.text

    def close(self) -> None:
        self._session.close()

    def _get_json(self, path: str, params: Mapping[str, Any]) -> Mapping[str, Any]:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s params=%s", url, dict(params))
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"X-Figma-Token": self._settings.token},
                timeout=self._settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise FigmaApiError(f"Figma API request failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not response.ok:
            detail = _error_detail(payload) or response.reason
            raise FigmaApiError(
                f"Figma API returned HTTP {response.status_code} for {path}: {detail}",
                status_code=response.status_code,
            )
        if not isinstance(payload, Mapping):
            raise FigmaApiError(f"Figma API returned a non-object payload for {path}.")
        return payload

    @staticmethod
    def _create_session(retries: int) -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=retries,
            backoff_factor=0.5,
            status_forcelist=_RETRY_STATUSES,
            allowed_methods=frozenset({"GET"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session


def _error_detail(payload: Any) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    for key in ("err", "message"):
        value = payload.get(key)
        if value:
            return str(value)
    return None
