#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/renderers/base.py
"""Base classes for document tree renderers.

This module defines the abstract base class renderers inherit from and the
inline style mixin used to turn nested inline nodes into flat lists of
styled text runs.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any, Optional

from mdpreview.ast.nodes import Document, Node, TableRow
from mdpreview.constants import BaselineType
from mdpreview.exceptions import InvalidOptionsError
from mdpreview.options.base import BaseRendererOptions
from mdpreview.visual.nodes import TextRun


class BaseRenderer(ABC):
    """Abstract base class for document tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    Examples
    --------
    Creating a custom renderer:

        >>> class WordCountRenderer(BaseRenderer):
        ...     def render(self, doc):
        ...         return len(extract_text(doc).split())

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, doc: Document) -> Any:
        """Render a document tree.

        Parameters
        ----------
        doc : Document
            Document tree to render

        Returns
        -------
        Any
            Renderer-specific output

        """
        pass

    @staticmethod
    def _compute_table_columns(rows: list[TableRow]) -> int:
        """Compute the number of columns needed for a table.

        Parameters
        ----------
        rows : list[TableRow]
            All table rows (including header)

        Returns
        -------
        int
            Cell count of the widest row

        """
        return max((len(row.cells) for row in rows), default=0)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )


@dataclass(frozen=True)
class InlineStyle:
    """Style inherited by text runs while rendering nested inline nodes."""

    color: str
    font_size: float
    background: Optional[str] = None
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    baseline: BaselineType = "normal"
    monospace: bool = False
    link: Optional[str] = None

    def run(self, text: str, **overrides: Any) -> TextRun:
        """Create a text run carrying this style, with optional overrides."""
        style = replace(self, **overrides) if overrides else self
        return TextRun(
            text=text,
            color=style.color,
            background=style.background,
            font_size=style.font_size,
            bold=style.bold,
            italic=style.italic,
            underline=style.underline,
            strikethrough=style.strikethrough,
            baseline=style.baseline,
            monospace=style.monospace,
            link=style.link,
        )


class InlineStyleMixin:
    """Mixin providing the inline rendering pattern for the visual renderer.

    Inline visitor methods append ``TextRun`` objects to ``_runs`` using the
    current ``_style``. ``_render_inline_content()`` temporarily captures
    those runs, optionally under a modified style, so that nested emphasis,
    links and code spans flatten into one list of runs.

    The implementing class must have:
    - A ``_runs`` attribute (list[TextRun]) for accumulating output
    - A ``_style`` attribute (InlineStyle) with the current style
    - Visitor methods that append to ``_runs``

    Examples
    --------
        >>> def visit_emphasis(self, node):
        ...     runs = self._render_inline_content(node.content, bold=True)
        ...     self._runs.extend(runs)

    """

    _runs: list[TextRun]
    _style: InlineStyle

    def _render_inline_content(self, content: list[Node], **style_overrides: Any) -> list[TextRun]:
        """Render a list of inline nodes to text runs.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render
        **style_overrides : Any
            InlineStyle fields to change for the duration of this call

        Returns
        -------
        list of TextRun
            Runs produced by the nodes, in order

        """
        saved_runs = self._runs
        saved_style = self._style
        self._runs = []
        if style_overrides:
            self._style = replace(saved_style, **style_overrides)

        try:
            for node in content:
                self._render_inline(node)
            return self._runs
        finally:
            self._runs = saved_runs
            self._style = saved_style

    def _render_inline(self, node: Node) -> None:
        """Render one inline node into ``_runs``."""
        node.accept(self)
