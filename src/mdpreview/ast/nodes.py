#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/ast/nodes.py
"""AST node classes for parsed markdown documents.

This module defines the closed node hierarchy the preview engine consumes.
A document tree is produced by a markdown parser (see
``mdpreview.parsers.markdown``), handed to the preview renderer for a single
render pass, and then discarded. The renderer treats it as read-only.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Block-level nodes:
    - Document, Heading, Paragraph, CodeBlock, MathBlock, BlockQuote
    - List, ListItem, Table, TableRow, TableCell, ThematicBreak
    - DefinitionList, DefinitionItem, Figure, FootnoteGroup, Footnote

Inline nodes:
    - Text, Emphasis, Code, Link, LineBreak
    - FootnoteReference, Abbreviation, MathInline, TaskMarker

Emphasis is a single node kind disambiguated by its delimiter pair, the way
markdown extensions define it: ``**``/``__`` bold, ``*``/``_`` italic,
``==`` mark, ``~~`` strikethrough, ``~`` subscript, ``^`` superscript and
``++`` inserted text.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


class Node(ABC):
    """Base class for all AST nodes.

    All document nodes inherit from this base class and support the visitor
    pattern for traversal and rendering.

    Parameters
    ----------
    metadata : dict, default = empty dict
        Arbitrary metadata associated with this node

    """

    metadata: dict[str, Any]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root document node containing all block-level nodes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    metadata : dict, default = empty dict
        Document-level metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    level : int
        Heading level (1-6, where 1 is most important)
    content : list of Node, default = empty list
        Inline nodes representing heading text
    metadata : dict, default = empty dict
        Heading metadata

    """

    level: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content
    metadata : dict, default = empty dict
        Paragraph metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class CodeBlock(Node):
    """Fenced or indented code block.

    Parameters
    ----------
    content : str
        Raw code, lines separated by newlines
    language : str or None, default = None
        Language tag from the fence info string, as written (case preserved)
    metadata : dict, default = empty dict
        Code block metadata (e.g. the full info string)

    """

    content: str
    language: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def lines(self) -> list[str]:
        """Return the code split into lines, without the trailing fence newline."""
        text = self.content[:-1] if self.content.endswith("\n") else self.content
        return text.split("\n") if text else []

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code_block(self)


@dataclass
class MathBlock(Node):
    """Display math block (``$$ ... $$``).

    Parameters
    ----------
    content : str
        Raw math source
    metadata : dict, default = empty dict
        Math block metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this math block."""
        return visitor.visit_math_block(self)


@dataclass
class BlockQuote(Node):
    """Block quote containing arbitrary block content, including nested quotes.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes inside the quote
    metadata : dict, default = empty dict
        Quote metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Ordered or unordered list.

    Parameters
    ----------
    ordered : bool, default = False
        Whether items are numbered
    items : list of ListItem, default = empty list
        List items
    start : int, default = 1
        Number of the first item for ordered lists
    metadata : dict, default = empty dict
        List metadata

    """

    ordered: bool = False
    items: list[ListItem] = field(default_factory=list)
    start: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """Single list item.

    Task list items carry a ``TaskMarker`` as the first inline of their first
    paragraph; the marker is structural and is never rendered as text.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level content of the item (paragraphs, nested lists, ...)
    metadata : dict, default = empty dict
        Item metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class TableCell(Node):
    """Table cell with inline content.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes in the cell
    metadata : dict, default = empty dict
        Cell metadata

    """

    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class TableRow(Node):
    """Table row.

    Parameters
    ----------
    cells : list of TableCell, default = empty list
        Cells in column order
    metadata : dict, default = empty dict
        Row metadata

    """

    cells: list[TableCell] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class Table(Node):
    """Table node.

    The first row is always the header row; there is no separate header field.

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        All rows, header first
    metadata : dict, default = empty dict
        Table metadata (e.g. column alignments reported by the parser)

    """

    rows: list[TableRow] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class ThematicBreak(Node):
    """Horizontal rule (``---``)."""

    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class DefinitionItem(Node):
    """One term with its definitions.

    The first paragraph-like child is the term, every following one is a
    definition.

    Parameters
    ----------
    children : list of Node, default = empty list
        Term paragraph followed by definition paragraphs
    metadata : dict, default = empty dict
        Item metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition item."""
        return visitor.visit_definition_item(self)


@dataclass
class DefinitionList(Node):
    """Definition list (``Term`` / ``: definition``).

    Parameters
    ----------
    items : list of DefinitionItem, default = empty list
        Terms with their definitions
    metadata : dict, default = empty dict
        List metadata

    """

    items: list[DefinitionItem] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition list."""
        return visitor.visit_definition_list(self)


@dataclass
class Figure(Node):
    """Figure block: an image paragraph plus caption paragraphs.

    Parameters
    ----------
    children : list of Node, default = empty list
        Paragraphs inside the figure; image-led paragraphs render as images,
        the rest as captions
    metadata : dict, default = empty dict
        Figure metadata

    """

    children: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this figure."""
        return visitor.visit_figure(self)


@dataclass
class Footnote(Node):
    """Single footnote definition.

    Parameters
    ----------
    index : int
        1-based footnote number in order of first reference
    children : list of Node, default = empty list
        Block-level footnote content
    identifier : str, default = ""
        Label used in the source (``[^label]``)
    metadata : dict, default = empty dict
        Footnote metadata

    """

    index: int
    children: list[Node] = field(default_factory=list)
    identifier: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote."""
        return visitor.visit_footnote(self)


@dataclass
class FootnoteGroup(Node):
    """All footnote definitions of a document, rendered after a separator.

    Parameters
    ----------
    footnotes : list of Footnote, default = empty list
        Footnotes in display order
    metadata : dict, default = empty dict
        Group metadata

    """

    footnotes: list[Footnote] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote group."""
        return visitor.visit_footnote_group(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Literal text.

    Parameters
    ----------
    content : str
        Text content
    metadata : dict, default = empty dict
        Text metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Delimited emphasis span.

    Parameters
    ----------
    delimiter_char : str
        Delimiter character (``*``, ``_``, ``=``, ``~``, ``^`` or ``+``)
    delimiter_count : int
        Number of delimiter characters on each side
    content : list of Node, default = empty list
        Emphasized inline nodes
    metadata : dict, default = empty dict
        Emphasis metadata

    Examples
    --------
        >>> Emphasis(delimiter_char="*", delimiter_count=2, content=[Text("bold")])
        >>> Emphasis(delimiter_char="=", delimiter_count=2, content=[Text("highlighted")])

    """

    delimiter_char: str
    delimiter_count: int
    content: list[Node] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate the delimiter pair."""
        if len(self.delimiter_char) != 1:
            raise ValueError(f"delimiter_char must be a single character, got {self.delimiter_char!r}")
        if self.delimiter_count < 1:
            raise ValueError(f"delimiter_count must be positive, got {self.delimiter_count}")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Code(Node):
    """Inline code span.

    Parameters
    ----------
    content : str
        Code text without the backticks
    metadata : dict, default = empty dict
        Code metadata

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code span."""
        return visitor.visit_code(self)


@dataclass
class Link(Node):
    """Hyperlink or image.

    Images are links with ``is_image=True``; their content is the alt text.

    Parameters
    ----------
    url : str
        Link target or image source
    content : list of Node, default = empty list
        Link text (or image alt text)
    title : str or None, default = None
        Optional title
    is_image : bool, default = False
        Whether this is an image reference
    metadata : dict, default = empty dict
        Link metadata

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: Optional[str] = None
    is_image: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class LineBreak(Node):
    """Line break.

    Parameters
    ----------
    soft : bool, default = False
        True for a soft break (plain newline in the source), False for a hard break

    """

    soft: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line break."""
        return visitor.visit_line_break(self)


@dataclass
class FootnoteReference(Node):
    """Reference to a footnote (``[^label]``).

    Parameters
    ----------
    index : int
        1-based number of the referenced footnote
    identifier : str, default = ""
        Label used in the source

    """

    index: int
    identifier: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


@dataclass
class Abbreviation(Node):
    """Abbreviation occurrence (``*[HTML]: Hyper Text Markup Language``).

    Parameters
    ----------
    label : str
        The abbreviated text as it appears in the document
    title : str or None, default = None
        Expansion of the abbreviation

    """

    label: str
    title: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this abbreviation."""
        return visitor.visit_abbreviation(self)


@dataclass
class MathInline(Node):
    """Inline math (``$...$``).

    Parameters
    ----------
    content : str
        Raw math source without delimiters

    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline math."""
        return visitor.visit_math_inline(self)


@dataclass
class TaskMarker(Node):
    """Task list checkbox marker (``[ ]`` or ``[x]``).

    Parameters
    ----------
    checked : bool
        Whether the box is ticked

    """

    checked: bool
    metadata: dict[str, Any] = field(default_factory=dict)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this task marker."""
        return visitor.visit_task_marker(self)


BLOCK_NODE_TYPES: tuple[type[Node], ...] = (
    Document,
    Heading,
    Paragraph,
    CodeBlock,
    MathBlock,
    BlockQuote,
    List,
    ListItem,
    Table,
    TableRow,
    TableCell,
    ThematicBreak,
    DefinitionList,
    DefinitionItem,
    Figure,
    FootnoteGroup,
    Footnote,
)

INLINE_NODE_TYPES: tuple[type[Node], ...] = (
    Text,
    Emphasis,
    Code,
    Link,
    LineBreak,
    FootnoteReference,
    Abbreviation,
    MathInline,
    TaskMarker,
)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> heading = Heading(level=1, content=[Text("Hello"), Emphasis("*", 2, content=[Text("world")])])
    >>> len(get_node_children(heading))
    2

    """
    if isinstance(node, (Document, BlockQuote, ListItem, DefinitionItem, Figure, Footnote)):
        return list(node.children)

    if isinstance(node, (Heading, Paragraph, Emphasis, Link, TableCell)):
        return list(node.content)

    if isinstance(node, List):
        return list(node.items)

    if isinstance(node, Table):
        return list(node.rows)

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, DefinitionList):
        return list(node.items)

    if isinstance(node, FootnoteGroup):
        return list(node.footnotes)

    return []
