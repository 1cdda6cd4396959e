"""Sync execution domain exports."""

from .icon_sync_use_case import (
    NoIconsExtractedError,
    OutputWriteError,
    PageNotFoundError,
    SyncExecutionError,
    execute_icon_sync,
)
from .sync_contracts import SyncArtifacts, SyncOutcome, SyncRequest

__all__ = [
    "SyncRequest",
    "SyncOutcome",
    "SyncArtifacts",
    "SyncExecutionError",
    "PageNotFoundError",
    "NoIconsExtractedError",
    "OutputWriteError",
    "execute_icon_sync",
]
