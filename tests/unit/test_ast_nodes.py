#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for document tree nodes and helpers."""

from unittest.mock import Mock

import pytest

from mdpreview.ast import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
    Abbreviation,
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Footnote,
    FootnoteGroup,
    Heading,
    Link,
    List,
    ListItem,
    MathInline,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TaskMarker,
    Text,
    ThematicBreak,
    extract_text,
    find_task_marker,
    get_node_children,
    is_empty_document,
)


@pytest.mark.unit
class TestNodeValidation:
    """Test construction-time checks."""

    @pytest.mark.parametrize("level", [1, 3, 6])
    def test_heading_levels(self, level: int) -> None:
        """Test valid heading levels."""
        assert Heading(level=level).level == level

    @pytest.mark.parametrize("level", [0, 7, -1])
    def test_heading_level_out_of_range(self, level: int) -> None:
        """Test levels outside 1-6 are rejected."""
        with pytest.raises(ValueError, match="1-6"):
            Heading(level=level)

    def test_emphasis_delimiter_char(self) -> None:
        """Test multi-character delimiters are rejected."""
        with pytest.raises(ValueError):
            Emphasis(delimiter_char="**", delimiter_count=1)

    def test_emphasis_delimiter_count(self) -> None:
        """Test non-positive counts are rejected."""
        with pytest.raises(ValueError):
            Emphasis(delimiter_char="*", delimiter_count=0)

    def test_node_type_groups_disjoint(self) -> None:
        """Test no node type is both block and inline."""
        assert not set(BLOCK_NODE_TYPES) & set(INLINE_NODE_TYPES)


@pytest.mark.unit
class TestCodeBlockLines:
    """Test CodeBlock.lines."""

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("a\nb\n", ["a", "b"]),
            ("a\nb", ["a", "b"]),
            ("a\n\n", ["a", ""]),
            ("", []),
            ("\n", []),
        ],
    )
    def test_lines(self, content: str, expected: list[str]) -> None:
        """Test the trailing newline is dropped before splitting."""
        assert CodeBlock(content=content).lines == expected


@pytest.mark.unit
class TestAccept:
    """Test visitor dispatch."""

    @pytest.mark.parametrize(
        "node,method",
        [
            (Document(), "visit_document"),
            (Heading(level=2), "visit_heading"),
            (CodeBlock(content="x"), "visit_code_block"),
            (BlockQuote(), "visit_block_quote"),
            (List(), "visit_list"),
            (ThematicBreak(), "visit_thematic_break"),
            (Emphasis(delimiter_char="=", delimiter_count=2), "visit_emphasis"),
            (Link(url="https://example.com"), "visit_link"),
            (TaskMarker(checked=True), "visit_task_marker"),
        ],
    )
    def test_dispatch(self, node, method: str) -> None:
        """Test each node calls its own visit method and returns its result."""
        visitor = Mock()
        getattr(visitor, method).return_value = "visited"

        assert node.accept(visitor) == "visited"
        getattr(visitor, method).assert_called_once_with(node)


@pytest.mark.unit
class TestGetNodeChildren:
    """Test uniform child access."""

    def test_containers(self) -> None:
        """Test each container kind exposes its children."""
        text = Text(content="x")
        cell = TableCell(content=[text])
        row = TableRow(cells=[cell])
        item = ListItem(children=[Paragraph(content=[text])])
        footnote = Footnote(index=1, children=[Paragraph()])

        assert get_node_children(Paragraph(content=[text])) == [text]
        assert get_node_children(List(items=[item])) == [item]
        assert get_node_children(Table(rows=[row])) == [row]
        assert get_node_children(row) == [cell]
        assert get_node_children(FootnoteGroup(footnotes=[footnote])) == [footnote]

    def test_leaves(self) -> None:
        """Test leaf nodes have no children."""
        assert get_node_children(Text(content="x")) == []
        assert get_node_children(CodeBlock(content="x")) == []

    def test_returns_copy(self) -> None:
        """Test mutating the result leaves the node unchanged."""
        doc = Document(children=[ThematicBreak()])
        get_node_children(doc).clear()
        assert len(doc.children) == 1


@pytest.mark.unit
class TestExtractText:
    """Test plain text extraction from nodes."""

    def test_nested(self) -> None:
        """Test text is collected through nested inlines."""
        para = Paragraph(
            content=[
                Text(content="Hello "),
                Emphasis(delimiter_char="*", delimiter_count=2, content=[Text(content="world")]),
            ]
        )
        assert extract_text(para, joiner="") == "Hello world"

    def test_default_joiner(self) -> None:
        """Test parts are joined with a space by default."""
        nodes = [Text(content="a"), Code(content="b"), MathInline(content="c")]
        assert extract_text(nodes) == "a b c"

    def test_abbreviation_and_marker(self) -> None:
        """Test abbreviations contribute their label and markers nothing."""
        para = Paragraph(content=[TaskMarker(checked=False), Abbreviation(label="HTML", title="Hyper Text")])
        assert extract_text(para) == "HTML"

    def test_empty(self) -> None:
        """Test empty input gives an empty string."""
        assert extract_text([]) == ""
        assert extract_text(Document()) == ""


@pytest.mark.unit
class TestStructuralHelpers:
    """Test find_task_marker and is_empty_document."""

    def test_task_marker_found(self) -> None:
        """Test a leading marker in the first paragraph is found."""
        marker = TaskMarker(checked=True)
        item = ListItem(children=[Paragraph(content=[marker, Text(content=" done")])])
        assert find_task_marker(item) is marker

    @pytest.mark.parametrize(
        "item",
        [
            ListItem(),
            ListItem(children=[Paragraph(content=[Text(content="plain")])]),
            ListItem(children=[Paragraph(content=[Text(content="x"), TaskMarker(checked=False)])]),
            ListItem(children=[CodeBlock(content="[ ]")]),
        ],
    )
    def test_task_marker_absent(self, item: ListItem) -> None:
        """Test plain items and misplaced markers are not tasks."""
        assert find_task_marker(item) is None

    def test_is_empty_document(self) -> None:
        """Test only a document without blocks is empty."""
        assert is_empty_document(Document())
        assert not is_empty_document(Document(children=[ThematicBreak()]))
