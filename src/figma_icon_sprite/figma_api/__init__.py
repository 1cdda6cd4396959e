"""Figma API exports."""

from .document_nodes import DocumentNode
from .rest_client import FIGMA_API_BASE, FigmaApi, FigmaApiError, FigmaClient

__all__ = [
    "DocumentNode",
    "FIGMA_API_BASE",
    "FigmaApi",
    "FigmaApiError",
    "FigmaClient",
]
