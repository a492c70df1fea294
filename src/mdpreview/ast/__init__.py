#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/ast/__init__.py
"""Document tree consumed by the preview renderer.

The module consists of:

- nodes: block and inline node dataclasses
- visitors: the ``NodeVisitor`` contract every renderer implements
- utils: text extraction and small structural helpers

Examples
--------
    >>> from mdpreview.ast import Document, Heading, Paragraph, Text
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])

"""

from __future__ import annotations

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
    get_node_children,
)
from mdpreview.ast.utils import extract_text, find_task_marker, is_empty_document
from mdpreview.ast.visitors import NodeVisitor

__all__ = [
    "BLOCK_NODE_TYPES",
    "INLINE_NODE_TYPES",
    "Abbreviation",
    "BlockQuote",
    "Code",
    "CodeBlock",
    "DefinitionItem",
    "DefinitionList",
    "Document",
    "Emphasis",
    "Figure",
    "Footnote",
    "FootnoteGroup",
    "FootnoteReference",
    "Heading",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "MathBlock",
    "MathInline",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    "TaskMarker",
    "Text",
    "ThematicBreak",
    "extract_text",
    "find_task_marker",
    "get_node_children",
    "is_empty_document",
]
