#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/visual/__init__.py
"""Toolkit-independent visual tree produced by the preview renderer."""

from __future__ import annotations

from mdpreview.visual.nodes import (
    NO_EDGES,
    Edges,
    GridCell,
    GridRow,
    Image,
    InteractiveCheckbox,
    StyledContainer,
    TableGrid,
    TextRun,
    VisualNode,
    find_checkboxes,
    iter_visual_nodes,
)
from mdpreview.visual.text import extract_rendered_text

__all__ = [
    "NO_EDGES",
    "Edges",
    "GridCell",
    "GridRow",
    "Image",
    "InteractiveCheckbox",
    "StyledContainer",
    "TableGrid",
    "TextRun",
    "VisualNode",
    "extract_rendered_text",
    "find_checkboxes",
    "iter_visual_nodes",
]
