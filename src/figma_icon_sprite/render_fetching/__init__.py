"""Render fetching exports."""

from .fetch_coordinator import RENDER_FORMAT, RenderFetchCoordinator, RenderFetchError
from .fetch_outcomes import RenderedIcon

__all__ = [
    "RENDER_FORMAT",
    "RenderFetchCoordinator",
    "RenderFetchError",
    "RenderedIcon",
]
