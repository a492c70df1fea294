#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/renderers/preview.py
"""Document tree to visual tree renderer.

This module builds the styled, immutable visual tree shown in the preview
pane. The renderer is total over the document node kinds: every node renders
to something, unknown nodes degrade to their best-effort text, and an element
that fails to render is replaced by a placeholder while the rest of the
document renders normally.

The result depends only on the document tree, the theme, the render mode and
the options, so rendering the same input twice yields equal trees.

Cancellation is cooperative. When a ``CancellationToken`` is supplied the
renderer checks it between blocks and raises ``RenderCancelledError`` once it
is cancelled, so partial output never escapes.

"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlsplit

from mdpreview.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Abbreviation,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionItem,
    DefinitionList,
    Document,
    Emphasis,
    Figure,
    Footnote,
    FootnoteGroup,
    FootnoteReference,
    Heading,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TaskMarker,
    Text,
    ThematicBreak,
)
from mdpreview.ast.utils import extract_text, find_task_marker, is_empty_document
from mdpreview.ast.visitors import NodeVisitor
from mdpreview.constants import (
    FOOTNOTES_TITLE,
    MARK_BACKGROUND_COLOR,
    MARK_FOREGROUND_COLOR,
    MATH_COLOR,
    MATH_LANGUAGES,
    MERMAID_LANGUAGES,
    QUOTE_ACCENT_WIDTH,
    RenderModeType,
)
from mdpreview.exceptions import RenderCancelledError, ValidationError
from mdpreview.highlighting import CodeTokenizer, NullTokenizer, PygmentsTokenizer
from mdpreview.options.preview import PreviewOptions
from mdpreview.renderers.base import BaseRenderer, InlineStyle, InlineStyleMixin
from mdpreview.renderers.mermaid import render_mermaid_placeholder
from mdpreview.theme import Palette, ThemeLike, resolve_palette
from mdpreview.utils.decorators import debug_timer
from mdpreview.visual.nodes import (
    GridCell,
    GridRow,
    Image,
    InteractiveCheckbox,
    StyledContainer,
    TableGrid,
    TextRun,
    VisualNode,
)

if TYPE_CHECKING:
    from mdpreview.live.cancellation import CancellationToken

logger = logging.getLogger(__name__)

# Schemes a host image loader is expected to resolve; one-letter schemes are Windows drive letters
_LOADABLE_IMAGE_SCHEMES = frozenset({"", "http", "https", "file", "data"})

_default_tokenizer = PygmentsTokenizer()


class PreviewRenderer(NodeVisitor, InlineStyleMixin, BaseRenderer):
    """Render a document tree into a tuple of visual nodes.

    Parameters
    ----------
    theme : bool, Theme, str or Palette, default False
        Theme or ``is_dark`` flag; resolved to a palette once per renderer
    mode : {"edit", "read"}, default "edit"
        Render mode. Only affects the empty-document placeholder.
    options : PreviewOptions or None, default None
        Rendering options
    tokenizer : CodeTokenizer or None, default None
        Code tokenizer for fenced code blocks. Defaults to a shared
        ``PygmentsTokenizer`` (or no highlighting when
        ``options.enable_highlighting`` is False).
    cancel_token : CancellationToken or None, default None
        Token checked between blocks

    Examples
    --------
        >>> renderer = PreviewRenderer(theme=True)
        >>> tree = renderer.render(doc)

    """

    def __init__(
        self,
        theme: ThemeLike | Palette = False,
        mode: RenderModeType = "edit",
        options: PreviewOptions | None = None,
        tokenizer: Optional[CodeTokenizer] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        """Initialize the renderer with theme, mode and options."""
        BaseRenderer._validate_options_type(options, PreviewOptions, "preview")
        options = options or PreviewOptions()
        BaseRenderer.__init__(self, options)
        self.options: PreviewOptions = options

        if mode not in ("edit", "read"):
            raise ValidationError(
                f"mode must be 'edit' or 'read', got {mode!r}", parameter_name="mode", parameter_value=mode
            )
        self.mode: RenderModeType = mode
        self.palette = resolve_palette(theme)

        if not options.enable_highlighting:
            tokenizer = NullTokenizer()
        elif tokenizer is None:
            tokenizer = _default_tokenizer
        self.tokenizer: CodeTokenizer = tokenizer
        self.cancel_token = cancel_token

        self._runs: list[TextRun] = []
        self._style = self._base_style()
        self._checkbox_counts: dict[bool, int] = {True: 0, False: 0}
        self._list_depth = 0
        self._list_marker: tuple[bool, int] | None = None

    def _base_style(self) -> InlineStyle:
        return InlineStyle(color=self.palette.text, font_size=self.options.base_font_size)

    def render(self, doc: Document) -> tuple[VisualNode, ...]:
        """Render a document tree to visual nodes.

        Parameters
        ----------
        doc : Document
            Document tree to render (not modified)

        Returns
        -------
        tuple of VisualNode
            Top-level visual nodes in document order

        Raises
        ------
        RenderCancelledError
            If the cancellation token is cancelled during the pass

        """
        self._runs = []
        self._style = self._base_style()
        self._checkbox_counts = {True: 0, False: 0}
        self._list_depth = 0
        self._list_marker = None

        with debug_timer(logger, "Preview build"):
            nodes = doc.accept(self)
        return tuple(nodes)

    # ------------------------------------------------------------------
    # Block plumbing
    # ------------------------------------------------------------------

    def _check_cancelled(self) -> None:
        if self.cancel_token is not None:
            self.cancel_token.raise_if_cancelled()

    def _render_blocks(self, nodes: list[Node]) -> list[VisualNode]:
        """Render block nodes in order, checking for cancellation before each one."""
        output: list[VisualNode] = []
        for node in nodes:
            self._check_cancelled()
            output.extend(self._render_block(node))
        return output

    def _render_block(self, node: Node) -> list[VisualNode]:
        """Render one block, isolating failures to a placeholder."""
        if isinstance(node, INLINE_NODE_TYPES):
            return [self._paragraph(self._render_inline_content([node]))]
        if not isinstance(node, BLOCK_NODE_TYPES):
            text = self._best_effort_text(node)
            logger.debug(f"Unknown block node {type(node).__name__}, rendering as text")
            return [self._paragraph([self._style.run(text)])] if text else []

        saved_style = self._style
        try:
            return list(node.accept(self))
        except RenderCancelledError:
            raise
        except Exception as e:
            self._style = saved_style
            return self._element_failed(node, e)

    def _element_failed(self, node: Node, error: Exception) -> list[VisualNode]:
        name = type(node).__name__
        logger.warning(f"Failed to render {name}, using placeholder: {error}")
        return [self._placeholder(f"[Unable to render {name}]")]

    def _render_inline(self, node: Node) -> None:
        if isinstance(node, INLINE_NODE_TYPES):
            node.accept(self)
            return
        text = self._best_effort_text(node)
        if text:
            self._runs.append(self._style.run(text))

    @staticmethod
    def _best_effort_text(node: Any) -> str:
        content = getattr(node, "content", None)
        if isinstance(content, str):
            return content
        if isinstance(node, Node):
            text = extract_text(node, joiner="")
            if text:
                return text
        for attr in ("content", "children"):
            value = getattr(node, attr, None)
            if isinstance(value, list):
                return extract_text([child for child in value if isinstance(child, Node)], joiner="")
        return ""

    def _paragraph(self, runs: list[TextRun], role: str = "paragraph", **kwargs: Any) -> StyledContainer:
        kwargs.setdefault("margin", (0, 0, 0, 10))
        return StyledContainer(role=role, orientation="inline", children=tuple(runs), **kwargs)

    def _placeholder(self, text: str, role: str = "placeholder", **kwargs: Any) -> StyledContainer:
        run = TextRun(text=text, color=self.palette.muted, font_size=self.options.base_font_size, italic=True)
        return self._paragraph([run], role=role, **kwargs)

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> list[VisualNode]:
        """Render the document's blocks, or the empty-document placeholder."""
        if is_empty_document(node):
            if self.mode == "edit":
                return [self._placeholder(self.options.empty_placeholder)]
            return []
        return self._render_blocks(node.children)

    def visit_heading(self, node: Heading) -> list[VisualNode]:
        """Render a heading; levels 1 and 2 are followed by a full-width rule."""
        size = self.options.heading_font_size(node.level)
        runs = self._render_inline_content(node.content, font_size=size, bold=True)
        output: list[VisualNode] = [
            StyledContainer(
                role="heading",
                orientation="inline",
                children=tuple(runs),
                level=node.level,
                margin=(0, 16 if node.level <= 2 else 12, 0, 8),
            )
        ]
        if node.level <= 2:
            output.append(
                StyledContainer(
                    role="rule",
                    height=2.0 if node.level == 1 else 1.0,
                    background=self.palette.heading_rule,
                    margin=(0, 0, 0, 16),
                )
            )
        return output

    def visit_paragraph(self, node: Paragraph) -> list[VisualNode]:
        """Render a paragraph; a paragraph holding a single image renders as an image block."""
        if len(node.content) == 1 and isinstance(node.content[0], Link) and node.content[0].is_image:
            return self._render_image_block(node.content[0])
        return [self._paragraph(self._render_inline_content(node.content))]

    def _render_image_block(self, link: Link) -> list[VisualNode]:
        url = (link.url or "").strip()
        if not url:
            return [self._image_placeholder("Image: (No URL provided)")]
        if not self._is_loadable_url(url):
            logger.warning(f"Unable to load image {url!r}")
            return [self._image_placeholder(f"Image: {url}\n(Unable to load)")]

        output: list[VisualNode] = [
            Image(
                url=url,
                alt=extract_text(link.content, joiner=""),
                title=link.title,
                max_width=float(self.options.max_image_width),
            )
        ]
        if link.title:
            caption = TextRun(
                text=link.title,
                color=self.palette.muted,
                font_size=self.options.caption_font_size,
                italic=True,
            )
            output.append(self._paragraph([caption], role="caption", text_alignment="center"))
        return output

    def _image_placeholder(self, text: str) -> StyledContainer:
        return self._placeholder(
            text,
            role="image_placeholder",
            background=self.palette.code_background,
            border_color=self.palette.border,
            border=1,
            padding=20,
            corner_radius=4,
            text_alignment="center",
        )

    @staticmethod
    def _is_loadable_url(url: str) -> bool:
        try:
            scheme = urlsplit(url).scheme.lower()
        except ValueError:
            return False
        return scheme in _LOADABLE_IMAGE_SCHEMES or len(scheme) == 1

    def visit_code_block(self, node: CodeBlock) -> list[VisualNode]:
        """Render a code block, dispatching mermaid and math languages to their own styling."""
        language = (node.language or "").strip()
        key = language.lower()
        code = "\n".join(node.lines)

        if key in MERMAID_LANGUAGES:
            return [render_mermaid_placeholder(code, self.palette, self.options)]
        if key in MATH_LANGUAGES:
            return [self._math_block(code)]

        return [
            StyledContainer(
                role="code_block",
                orientation="inline",
                children=tuple(self._highlight(code, language)),
                background=self.palette.code_background,
                border_color=self.palette.code_border,
                border=1,
                padding=12,
                margin=(0, 0, 0, 10),
                corner_radius=4,
            )
        ]

    def _code_run(self, text: str, color: str) -> TextRun:
        return TextRun(text=text, color=color, font_size=self.options.code_font_size, monospace=True)

    def _highlight(self, code: str, language: str) -> list[TextRun]:
        """Color code through the tokenizer; plain text when unknown or on tokenizer failure."""
        if not code:
            return []
        plain = [self._code_run(code, self.palette.syntax_default)]
        if not language:
            return plain

        try:
            spans = self.tokenizer.tokenize(code, language)
        except Exception as e:
            logger.warning(f"Code tokenizer failed for language {language!r}, rendering plain text: {e}")
            return plain
        if not spans:
            return plain

        runs: list[TextRun] = []
        position = 0
        for span in sorted(spans, key=lambda s: s.start):
            start = max(span.start, position)
            end = min(span.end, len(code))
            if end <= start:
                continue
            if start > position:
                runs.append(self._code_run(code[position:start], self.palette.syntax_default))
            runs.append(self._code_run(code[start:end], self.palette.syntax_color(span.color_role)))
            position = end
        if position < len(code):
            runs.append(self._code_run(code[position:], self.palette.syntax_default))
        return runs

    def _math_block(self, content: str) -> StyledContainer:
        run = TextRun(
            text=content.strip(),
            color=MATH_COLOR,
            font_size=self.options.base_font_size + 2,
            monospace=True,
        )
        return StyledContainer(
            role="math_block",
            orientation="inline",
            children=(run,),
            background=self.palette.code_background,
            padding=12,
            margin=(0, 0, 0, 10),
            corner_radius=4,
            text_alignment="center",
        )

    def visit_math_block(self, node: MathBlock) -> list[VisualNode]:
        """Render display math with the math code block styling."""
        return [self._math_block(node.content)]

    def visit_block_quote(self, node: BlockQuote) -> list[VisualNode]:
        """Render a quote with italic text, a left accent bar and a tinted background."""
        saved_style = self._style
        self._style = replace(saved_style, italic=True)
        try:
            children = self._render_blocks(node.children)
        finally:
            self._style = saved_style
        return [
            StyledContainer(
                role="quote",
                children=tuple(children),
                background=self.palette.quote_background,
                border_color=self.palette.quote_border,
                border=(QUOTE_ACCENT_WIDTH, 0, 0, 0),
                padding=(12, 8, 12, 8),
                margin=(0, 0, 0, 10),
            )
        ]

    def visit_list(self, node: List) -> list[VisualNode]:
        """Render list items with bullets, 1-based counters or checkboxes."""
        self._list_depth += 1
        try:
            items: list[VisualNode] = []
            number = 1
            for item in node.items:
                self._check_cancelled()
                self._list_marker = (node.ordered, number)
                items.extend(self._render_block(item))
                number += 1
        finally:
            self._list_depth -= 1
            self._list_marker = None
        return [
            StyledContainer(
                role="list",
                children=tuple(items),
                level=self._list_depth + 1,
                margin=(0, 0, 0, 10),
            )
        ]

    def visit_list_item(self, node: ListItem) -> list[VisualNode]:
        """Render one list item as marker plus indented content."""
        ordered, number = self._list_marker or (False, 1)
        self._list_marker = None

        task_marker = find_task_marker(node)
        marker: VisualNode
        if task_marker is not None:
            marker = self._checkbox(task_marker.checked)
        elif ordered:
            marker = self._style.run(f"{number}. ")
        else:
            marker = self._style.run(f"{self.options.bullet_glyph} ")

        content = self._render_blocks(node.children)
        return [
            StyledContainer(
                role="list_item",
                orientation="horizontal",
                children=(marker, StyledContainer(role="list_item_content", children=tuple(content))),
                indent=self.options.list_indent,
                level=max(self._list_depth, 1),
                margin=(0, 0, 0, 4),
            )
        ]

    def _checkbox(self, checked: bool) -> InteractiveCheckbox:
        occurrence = self._checkbox_counts[checked]
        self._checkbox_counts[checked] = occurrence + 1
        return InteractiveCheckbox(
            checked=checked,
            glyph=self.options.checked_glyph if checked else self.options.unchecked_glyph,
            color=self.options.checked_color if checked else self.options.unchecked_color,
            occurrence_index=occurrence,
        )

    def visit_table(self, node: Table) -> list[VisualNode]:
        """Render a table as a star-sized grid; the first row is the header."""
        if not node.rows:
            return []
        column_count = self._compute_table_columns(node.rows)

        grid_rows = []
        for row_index, row in enumerate(node.rows):
            self._check_cancelled()
            is_header = row_index == 0
            if is_header:
                background = self.palette.table_header_background
            elif row_index % 2 == 0:
                background = self.palette.table_even_row
            else:
                background = self.palette.table_odd_row

            cells = []
            for column in range(column_count):
                children: tuple[VisualNode, ...] = ()
                if column < len(row.cells):
                    if is_header:
                        runs = self._render_inline_content(row.cells[column].content, bold=True)
                    else:
                        runs = self._render_inline_content(row.cells[column].content)
                    children = (self._paragraph(runs, role="table_cell", padding=(8, 6, 8, 6), margin=0),)
                cells.append(
                    GridCell(
                        row=row_index, column=column, children=children, background=background, is_header=is_header
                    )
                )
            grid_rows.append(GridRow(cells=tuple(cells)))

        return [TableGrid(column_count=column_count, rows=tuple(grid_rows), border_color=self.palette.table_border)]

    def visit_table_row(self, node: TableRow) -> list[VisualNode]:
        """Render a row found outside of a table as side-by-side cells."""
        cells: list[VisualNode] = []
        for cell in node.cells:
            cells.extend(self.visit_table_cell(cell))
        return [StyledContainer(role="table_row", orientation="horizontal", children=tuple(cells))]

    def visit_table_cell(self, node: TableCell) -> list[VisualNode]:
        """Render a cell found outside of a table as a paragraph."""
        return [self._paragraph(self._render_inline_content(node.content), role="table_cell", margin=0)]

    def visit_thematic_break(self, node: ThematicBreak) -> list[VisualNode]:
        """Render a horizontal rule."""
        return [StyledContainer(role="rule", height=1.0, background=self.palette.muted, margin=(0, 8, 0, 8))]

    def visit_definition_list(self, node: DefinitionList) -> list[VisualNode]:
        """Render a definition list."""
        children: list[VisualNode] = []
        for item in node.items:
            self._check_cancelled()
            children.extend(self._render_block(item))
        return [StyledContainer(role="definition_list", children=tuple(children), margin=(0, 0, 0, 16))]

    def visit_definition_item(self, node: DefinitionItem) -> list[VisualNode]:
        """Render a bold term followed by indented, muted definitions."""
        output: list[VisualNode] = []
        term_rendered = False
        for child in node.children:
            if not term_rendered and isinstance(child, Paragraph):
                runs = self._render_inline_content(child.content, bold=True)
                output.append(self._paragraph(runs, role="definition_term", margin=(0, 8, 0, 4)))
                term_rendered = True
                continue

            saved_style = self._style
            self._style = replace(saved_style, color=self.palette.muted)
            try:
                blocks = self._render_block(child)
            finally:
                self._style = saved_style
            output.append(
                StyledContainer(
                    role="definition",
                    children=tuple(blocks),
                    indent=self.options.definition_indent,
                    margin=(0, 0, 0, 4),
                )
            )
        return output

    def visit_figure(self, node: Figure) -> list[VisualNode]:
        """Render a centered figure: image paragraphs as images, the rest as captions."""
        children: list[VisualNode] = []
        for child in node.children:
            if isinstance(child, Paragraph):
                first = child.content[0] if child.content else None
                if isinstance(first, Link) and first.is_image:
                    children.extend(self._render_image_block(first))
                    continue
                runs = self._render_inline_content(
                    child.content,
                    italic=True,
                    color=self.palette.muted,
                    font_size=self.options.caption_font_size,
                )
                if "".join(run.text for run in runs).strip():
                    children.append(self._paragraph(runs, role="caption", text_alignment="center", margin=0))
            else:
                children.extend(self._render_block(child))
        return [
            StyledContainer(role="figure", children=tuple(children), text_alignment="center", margin=(0, 16, 0, 16))
        ]

    def visit_footnote_group(self, node: FootnoteGroup) -> list[VisualNode]:
        """Render the footnotes section after a separator rule."""
        children: list[VisualNode] = [
            StyledContainer(role="rule", height=1.0, background=self.palette.border, margin=(0, 0, 0, 12)),
            self._paragraph(
                [TextRun(text=FOOTNOTES_TITLE, color=self.palette.text, font_size=18.0, bold=True)],
                role="footnotes_title",
                margin=(0, 0, 0, 8),
            ),
        ]
        for footnote in node.footnotes:
            self._check_cancelled()
            children.extend(self._render_block(footnote))
        return [StyledContainer(role="footnotes", children=tuple(children), margin=(0, 24, 0, 0))]

    def visit_footnote(self, node: Footnote) -> list[VisualNode]:
        """Render one footnote prefixed with its ``[n]`` label."""
        label = TextRun(text=f"[{node.index}]", color=self.palette.link, font_size=12.0)
        saved_style = self._style
        self._style = replace(saved_style, font_size=13.0)
        try:
            content = self._render_blocks(node.children)
        finally:
            self._style = saved_style
        return [
            StyledContainer(
                role="footnote",
                orientation="horizontal",
                children=(label, StyledContainer(role="footnote_content", children=tuple(content))),
                margin=(0, 0, 0, 8),
            )
        ]

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render literal text with the current style."""
        if node.content:
            self._runs.append(self._style.run(node.content))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render emphasis according to its delimiter pair."""
        overrides = self._emphasis_style(node.delimiter_char, node.delimiter_count)
        self._runs.extend(self._render_inline_content(node.content, **overrides))

    def _emphasis_style(self, char: str, count: int) -> dict[str, Any]:
        if char in ("*", "_"):
            if count == 2:
                return {"bold": True}
            if count == 1:
                return {"italic": True}
            return {}

        key = (char, count)
        if key == ("=", 2):
            return {"background": MARK_BACKGROUND_COLOR, "color": MARK_FOREGROUND_COLOR}
        if key == ("~", 2):
            return {"strikethrough": True}
        if key == ("~", 1):
            return {"font_size": self.options.small_font_size, "baseline": "subscript"}
        if key == ("^", 1):
            return {"font_size": self.options.small_font_size, "baseline": "superscript"}
        if key == ("+", 2):
            return {"underline": True}
        return {}

    def visit_code(self, node: Code) -> None:
        """Render an inline code span wrapped in backticks."""
        self._runs.append(
            self._style.run(f"`{node.content}`", monospace=True, background=self.palette.inline_code_background)
        )

    def visit_link(self, node: Link) -> None:
        """Render a hyperlink, or an inline image reference."""
        if node.is_image:
            self._runs.append(self._style.run(f"[Image: {node.url}]", italic=True, color=self.palette.muted))
            return
        content = node.content or [Text(content=node.url)]
        self._runs.extend(
            self._render_inline_content(content, color=self.palette.link, underline=True, link=node.url)
        )

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a line break as a newline run."""
        self._runs.append(self._style.run("\n"))

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a superscript ``[n]`` footnote reference."""
        self._runs.append(
            self._style.run(
                f"[{node.index}]",
                color=self.palette.link,
                font_size=self.options.small_font_size,
                baseline="superscript",
            )
        )

    def visit_abbreviation(self, node: Abbreviation) -> None:
        """Render an abbreviation as its underlined label."""
        self._runs.append(self._style.run(node.label, underline=True))

    def visit_math_inline(self, node: MathInline) -> None:
        """Render inline math as monospace ``$...$``."""
        self._runs.append(self._style.run(f"${node.content}$", monospace=True, color=MATH_COLOR))

    def visit_task_marker(self, node: TaskMarker) -> None:
        """Task markers are structural; the list item renders the checkbox."""
        return None


def build(
    doc: Document,
    theme: ThemeLike | Palette = False,
    mode: RenderModeType = "edit",
    *,
    options: PreviewOptions | None = None,
    tokenizer: Optional[CodeTokenizer] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> tuple[VisualNode, ...]:
    r"""Build the visual tree for a document.

    This is a convenience function that creates a renderer and renders the
    document in one step.

    Parameters
    ----------
    doc : Document
        Document tree to render
    theme : bool, Theme, str or Palette, default False
        Theme or ``is_dark`` flag
    mode : {"edit", "read"}, default "edit"
        Render mode
    options : PreviewOptions or None, default None
        Rendering options
    tokenizer : CodeTokenizer or None, default None
        Code tokenizer (defaults to Pygments)
    cancel_token : CancellationToken or None, default None
        Cancellation token checked between blocks

    Returns
    -------
    tuple of VisualNode
        The visual tree

    Examples
    --------
    >>> from mdpreview.parsers.markdown import markdown_to_ast
    >>> tree = build(markdown_to_ast("# Title\\n\\nSome **bold** text."), theme=False)
    >>> tree[0].role, tree[1].role, tree[2].role
    ('heading', 'rule', 'paragraph')

    """
    renderer = PreviewRenderer(theme=theme, mode=mode, options=options, tokenizer=tokenizer, cancel_token=cancel_token)
    return renderer.render(doc)


__all__ = ["PreviewRenderer", "build"]
