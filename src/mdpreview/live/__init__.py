#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/live/__init__.py
"""Live preview loop: debounced scheduling, cancellation, scroll sync and the session model."""

from mdpreview.live.cancellation import CancellationToken
from mdpreview.live.scheduler import RenderScheduler, SchedulerState
from mdpreview.live.scroll import ScrollSynchronizer, map_scroll_offset, scroll_fraction
from mdpreview.live.session import DocumentSession, DocumentStats, LivePreview

__all__ = [
    "CancellationToken",
    "DocumentSession",
    "DocumentStats",
    "LivePreview",
    "RenderScheduler",
    "SchedulerState",
    "ScrollSynchronizer",
    "map_scroll_offset",
    "scroll_fraction",
]
