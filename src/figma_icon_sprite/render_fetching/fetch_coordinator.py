"""Render URL lookup and parallel SVG download service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait

from figma_icon_sprite.figma_api.rest_client import FigmaApi, FigmaApiError
from figma_icon_sprite.icon_set_analysis.analysis_outcomes import SymbolAssignment

from .fetch_outcomes import RenderedIcon

RENDER_FORMAT = "svg"

logger = logging.getLogger(__name__)


class RenderFetchError(Exception):
    """Raised when render URLs cannot be obtained or any icon download fails."""


class RenderFetchCoordinator:
    """Fetches rendered SVG for a batch of icons, all or nothing."""

    def __init__(self, client: FigmaApi, *, parallelism: int) -> None:
        self._client = client
        self._parallelism = max(1, parallelism)

    def fetch_render_urls(self, file_id: str, node_ids: Sequence[str]) -> dict[str, str]:
        """Request SVG render URLs for every node id in one batched call."""
        if not node_ids:
            return {}
        try:
            images = self._client.get_image_urls(file_id, node_ids, RENDER_FORMAT)
        except FigmaApiError as exc:
            raise RenderFetchError(f"Failed to obtain render URLs: {exc}") from exc
        missing = [node_id for node_id in node_ids if not images.get(node_id)]
        if missing:
            raise RenderFetchError(f"Figma did not render nodes: {', '.join(missing)}")
        return {node_id: str(images[node_id]) for node_id in node_ids}

    def download_all(
        self,
        assignments: Sequence[SymbolAssignment],
        render_urls: Mapping[str, str],
    ) -> tuple[RenderedIcon, ...]:
        """Download every icon in parallel and return results in input order.

        The first failed download aborts the batch: queued downloads are
        cancelled, running ones are abandoned and `RenderFetchError` is raised.
        """
        if not assignments:
            return ()
        jobs = [
            (assignment, self._render_url_for(assignment, render_urls))
            for assignment in assignments
        ]
        logger.info("Downloading %d icons with up to %d workers", len(jobs), self._parallelism)

        executor = ThreadPoolExecutor(max_workers=self._parallelism)
        futures: list[Future[str]] = []
        try:
            for _, url in jobs:
                futures.append(executor.submit(self._client.download_text, url))
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future, (assignment, _) in zip(futures, jobs):
                if future in done and future.exception() is not None:
                    raise RenderFetchError(
                        f"Failed to download icon '{assignment.symbol_id}': {future.exception()}"
                    ) from future.exception()
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        return tuple(
            RenderedIcon(assignment=assignment, render_url=url, svg_text=future.result())
            for future, (assignment, url) in zip(futures, jobs)
        )

    @staticmethod
    def _render_url_for(assignment: SymbolAssignment, render_urls: Mapping[str, str]) -> str:
        url = render_urls.get(assignment.candidate.node_id)
        if not url:
            raise RenderFetchError(f"No render URL for icon '{assignment.symbol_id}'.")
        return url
