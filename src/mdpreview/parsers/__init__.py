#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/parsers/__init__.py
"""Markdown parsers producing the document tree the preview renders."""

from mdpreview.parsers.base import BaseParser
from mdpreview.parsers.markdown import MarkdownParser, markdown_to_ast

__all__ = [
    "BaseParser",
    "MarkdownParser",
    "markdown_to_ast",
]
