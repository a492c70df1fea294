#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mdpreview components.

Each component has its own frozen options dataclass. Use
``create_updated()`` to derive a modified copy.
"""

from __future__ import annotations

from mdpreview.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdpreview.options.markdown import MarkdownParserOptions
from mdpreview.options.preview import PreviewOptions
from mdpreview.options.session import SessionOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "MarkdownParserOptions",
    "PreviewOptions",
    "SessionOptions",
]
