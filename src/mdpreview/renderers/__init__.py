#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/renderers/__init__.py
"""Renderers turning document trees into visual trees."""

from mdpreview.renderers.base import BaseRenderer, InlineStyle, InlineStyleMixin
from mdpreview.renderers.mermaid import MermaidSummary, render_mermaid_placeholder, summarize_mermaid
from mdpreview.renderers.preview import PreviewRenderer, build

__all__ = [
    "BaseRenderer",
    "InlineStyle",
    "InlineStyleMixin",
    "MermaidSummary",
    "PreviewRenderer",
    "build",
    "render_mermaid_placeholder",
    "summarize_mermaid",
]
