#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the markdown to document tree parser."""

import pytest

from mdpreview.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionList,
    Document,
    Emphasis,
    FootnoteGroup,
    FootnoteReference,
    Heading,
    LineBreak,
    Link,
    List,
    ListItem,
    MathBlock,
    MathInline,
    Paragraph,
    Table,
    TaskMarker,
    Text,
    ThematicBreak,
)
from mdpreview.ast.utils import extract_text, find_task_marker
from mdpreview.exceptions import InvalidOptionsError, ParsingError
from mdpreview.options import MarkdownParserOptions, PreviewOptions
from mdpreview.parsers import MarkdownParser, markdown_to_ast


@pytest.mark.unit
class TestMarkdownBasics:
    """Test basic markdown parsing."""

    def test_simple_paragraph(self) -> None:
        """Test parsing a simple paragraph."""
        doc = markdown_to_ast("This is a paragraph.")

        assert isinstance(doc, Document)
        assert len(doc.children) == 1
        para = doc.children[0]
        assert isinstance(para, Paragraph)
        assert para.content == [Text(content="This is a paragraph.")]

    def test_empty_source(self) -> None:
        """Test that empty and whitespace-only input give an empty document."""
        assert markdown_to_ast("").children == []
        assert markdown_to_ast("   \n\n\t").children == []

    def test_heading_levels(self) -> None:
        """Test parsing different heading levels."""
        doc = markdown_to_ast("# H1\n## H2\n### H3\n#### H4\n##### H5\n###### H6")

        assert [node.level for node in doc.children] == [1, 2, 3, 4, 5, 6]
        assert all(isinstance(node, Heading) for node in doc.children)
        assert extract_text(doc.children[2]) == "H3"

    def test_bold_inside_paragraph(self) -> None:
        """Test that strong emphasis keeps the surrounding text runs."""
        doc = markdown_to_ast("# Title\n\nSome **bold** text.")

        para = doc.children[1]
        assert isinstance(para, Paragraph)
        assert para.content[0] == Text(content="Some ")
        strong = para.content[1]
        assert isinstance(strong, Emphasis)
        assert (strong.delimiter_char, strong.delimiter_count) == ("*", 2)
        assert strong.content == [Text(content="bold")]
        assert para.content[2] == Text(content=" text.")

    def test_italic(self) -> None:
        """Test single delimiter emphasis."""
        para = markdown_to_ast("*it*").children[0]
        assert isinstance(para.content[0], Emphasis)
        assert para.content[0].delimiter_count == 1

    def test_crlf_line_endings(self) -> None:
        """Test that CRLF input parses like LF input."""
        assert markdown_to_ast("# A\r\n\r\nB") == markdown_to_ast("# A\n\nB")

    def test_non_string_input(self) -> None:
        """Test that non-string input raises ParsingError."""
        with pytest.raises(ParsingError) as exc_info:
            MarkdownParser().parse(b"# bytes")  # type: ignore[arg-type]
        assert exc_info.value.parsing_stage == "input"

    def test_wrong_options_type(self) -> None:
        """Test that a foreign options class is rejected."""
        with pytest.raises(InvalidOptionsError):
            MarkdownParser(PreviewOptions())  # type: ignore[arg-type]


@pytest.mark.unit
class TestInlineTokens:
    """Test inline token mapping."""

    def test_inline_code(self) -> None:
        """Test code spans."""
        para = markdown_to_ast("Use `x = 1` here").children[0]
        assert Code(content="x = 1") in para.content

    def test_link(self) -> None:
        """Test links keep url, title and content."""
        para = markdown_to_ast('[site](https://example.com "Example")').children[0]
        link = para.content[0]
        assert isinstance(link, Link)
        assert link.url == "https://example.com"
        assert link.title == "Example"
        assert not link.is_image
        assert extract_text(link) == "site"

    def test_image(self) -> None:
        """Test images become links flagged as images with alt text content."""
        para = markdown_to_ast('![a cat](cat.png "Kitty")').children[0]
        image = para.content[0]
        assert isinstance(image, Link)
        assert image.is_image
        assert image.url == "cat.png"
        assert image.title == "Kitty"
        assert extract_text(image) == "a cat"

    def test_soft_break(self) -> None:
        """Test a single newline inside a paragraph becomes a soft line break."""
        para = markdown_to_ast("line one\nline two").children[0]
        breaks = [node for node in para.content if isinstance(node, LineBreak)]
        assert len(breaks) == 1
        assert breaks[0].soft

    def test_hard_break(self) -> None:
        """Test two trailing spaces produce a hard line break."""
        para = markdown_to_ast("line one  \nline two").children[0]
        breaks = [node for node in para.content if isinstance(node, LineBreak)]
        assert len(breaks) == 1
        assert not breaks[0].soft

    def test_strikethrough(self) -> None:
        """Test strikethrough maps to a double tilde emphasis."""
        para = markdown_to_ast("~~gone~~").children[0]
        node = para.content[0]
        assert isinstance(node, Emphasis)
        assert (node.delimiter_char, node.delimiter_count) == ("~", 2)

    def test_mark(self) -> None:
        """Test highlight spans map to a double equals emphasis."""
        para = markdown_to_ast("==marked==").children[0]
        node = para.content[0]
        assert isinstance(node, Emphasis)
        assert (node.delimiter_char, node.delimiter_count) == ("=", 2)

    def test_insert(self) -> None:
        """Test double plus spans map to a double plus emphasis."""
        para = markdown_to_ast("keep ++added *words*++ here").children[0]
        inserted = [node for node in para.content if isinstance(node, Emphasis)]
        assert len(inserted) == 1
        assert (inserted[0].delimiter_char, inserted[0].delimiter_count) == ("+", 2)
        assert extract_text(inserted[0], joiner="") == "added words"
        assert isinstance(inserted[0].content[-1], Emphasis)

    def test_double_caret_is_not_insert(self) -> None:
        """Test ``^^x^^`` does not produce an inserted span."""
        doc = markdown_to_ast("^^x^^")
        emphasis = [node for node in doc.children[0].content if isinstance(node, Emphasis)]
        pairs = [(node.delimiter_char, node.delimiter_count) for node in emphasis]
        assert ("+", 2) not in pairs

    def test_unclosed_insert_is_text(self) -> None:
        """Test a lone ``++`` stays literal text."""
        doc = markdown_to_ast("a ++b c")
        assert not any(isinstance(node, Emphasis) for node in doc.children[0].content)
        assert extract_text(doc, joiner="") == "a ++b c"


    def test_strikethrough_disabled(self) -> None:
        """Test that disabling the extension leaves the tildes as text."""
        options = MarkdownParserOptions(parse_strikethrough=False, parse_extended_emphasis=False)
        doc = markdown_to_ast("~~gone~~", options)
        assert not any(isinstance(node, Emphasis) for node in doc.children[0].content)
        assert "~~gone~~" in extract_text(doc, joiner="")

    def test_inline_math(self) -> None:
        """Test dollar-delimited inline math."""
        para = markdown_to_ast("Euler: $e^{i\\pi}$").children[0]
        math = [node for node in para.content if isinstance(node, MathInline)]
        assert len(math) == 1
        assert math[0].content == "e^{i\\pi}"

    def test_inline_html_comment_dropped(self) -> None:
        """Test inline HTML comments produce no nodes."""
        para = markdown_to_ast("before <!-- hidden --> after").children[0]
        assert "hidden" not in extract_text(para, joiner="")


@pytest.mark.unit
class TestBlockTokens:
    """Test block token mapping."""

    def test_code_block_language_and_attrs(self) -> None:
        """Test the first info word is the language and the rest is metadata."""
        block = markdown_to_ast('```python title="demo.py"\nprint(1)\n```').children[0]
        assert isinstance(block, CodeBlock)
        assert block.language == "python"
        assert block.metadata["info_attrs"] == 'title="demo.py"'
        assert block.lines == ["print(1)"]

    def test_code_block_without_language(self) -> None:
        """Test fences without info have no language."""
        block = markdown_to_ast("```\nplain\n```").children[0]
        assert isinstance(block, CodeBlock)
        assert block.language is None

    def test_block_quote(self) -> None:
        """Test block quotes hold block children."""
        quote = markdown_to_ast("> quoted").children[0]
        assert isinstance(quote, BlockQuote)
        assert isinstance(quote.children[0], Paragraph)

    def test_thematic_break(self) -> None:
        """Test horizontal rules."""
        doc = markdown_to_ast("a\n\n---\n\nb")
        assert isinstance(doc.children[1], ThematicBreak)

    def test_unordered_list(self) -> None:
        """Test bullet lists."""
        lst = markdown_to_ast("- one\n- two").children[0]
        assert isinstance(lst, List)
        assert not lst.ordered
        assert len(lst.items) == 2
        assert all(isinstance(item, ListItem) for item in lst.items)
        assert extract_text(lst.items[1]) == "two"

    def test_ordered_list_start(self) -> None:
        """Test ordered lists keep their start number."""
        lst = markdown_to_ast("3. three\n4. four").children[0]
        assert lst.ordered
        assert lst.start == 3

    def test_ordered_list_default_start(self) -> None:
        """Test ordered lists starting at one."""
        lst = markdown_to_ast("1. one\n2. two").children[0]
        assert lst.ordered
        assert lst.start == 1

    def test_task_list_items(self) -> None:
        """Test task items get a leading TaskMarker and keep their text."""
        lst = markdown_to_ast("- [ ] todo\n- [x] done\n- plain").children[0]

        first, second, third = lst.items
        assert find_task_marker(first) == TaskMarker(checked=False)
        assert find_task_marker(second) == TaskMarker(checked=True)
        assert find_task_marker(third) is None
        assert extract_text(first) == "todo"

    def test_task_lists_disabled(self) -> None:
        """Test that without the extension the marker stays as text."""
        doc = markdown_to_ast("- [ ] todo", MarkdownParserOptions(parse_task_lists=False))
        item = doc.children[0].items[0]
        assert find_task_marker(item) is None
        assert "[ ]" in extract_text(item, joiner="")

    def test_table_header_first(self) -> None:
        """Test tables put the header row first with alignment metadata."""
        table = markdown_to_ast("| A | B |\n|:--|--:|\n| 1 | 2 |\n| 3 | 4 |").children[0]

        assert isinstance(table, Table)
        assert len(table.rows) == 3
        assert table.rows[0].metadata["is_header"] is True
        assert extract_text(table.rows[0].cells[0]) == "A"
        assert table.rows[0].cells[0].metadata["alignment"] == "left"
        assert table.rows[0].cells[1].metadata["alignment"] == "right"
        assert extract_text(table.rows[2].cells[1]) == "4"

    def test_block_math(self) -> None:
        """Test display math blocks."""
        block = markdown_to_ast("$$\nx^2 + y^2\n$$").children[0]
        assert isinstance(block, MathBlock)
        assert block.content == "x^2 + y^2"

    def test_html_block_as_text(self) -> None:
        """Test raw HTML blocks are kept as literal text."""
        para = markdown_to_ast("<div>hello</div>").children[0]
        assert isinstance(para, Paragraph)
        assert extract_text(para) == "<div>hello</div>"

    def test_html_comment_block_dropped(self) -> None:
        """Test HTML comment blocks produce no node."""
        doc = markdown_to_ast("<!-- note -->\n\ntext")
        assert len(doc.children) == 1
        assert extract_text(doc.children[0]) == "text"

    def test_definition_list(self) -> None:
        """Test definition lists produce a term paragraph and definitions."""
        dl = markdown_to_ast("Term\n: The definition").children[0]

        assert isinstance(dl, DefinitionList)
        item = dl.items[0]
        assert extract_text(item.children[0]) == "Term"
        assert "The definition" in extract_text(item.children[1:])

    def test_footnotes(self) -> None:
        """Test footnote references and the trailing footnote group."""
        doc = markdown_to_ast("Claim[^src].\n\n[^src]: The source.")

        refs = [node for node in doc.children[0].content if isinstance(node, FootnoteReference)]
        assert len(refs) == 1
        assert refs[0].index == 1

        group = doc.children[-1]
        assert isinstance(group, FootnoteGroup)
        assert [fn.index for fn in group.footnotes] == [1]
        assert group.footnotes[0].identifier == "src"
        assert extract_text(group.footnotes[0]) == "The source."

    def test_footnote_identifiers_match(self) -> None:
        """Test a reference and its definition share one normalized identifier."""
        doc = markdown_to_ast("Claim[^Src].\n\n[^SRC]: The source.")

        ref = next(node for node in doc.children[0].content if isinstance(node, FootnoteReference))
        group = doc.children[-1]
        assert ref.identifier == group.footnotes[0].identifier == "src"



@pytest.mark.unit
class TestParserReuse:
    """Test that one parser instance serves many parses."""

    def test_repeated_parses_are_equal(self) -> None:
        """Test parsing the same text twice gives equal trees."""
        parser = MarkdownParser()
        text = "# A\n\n- [ ] b\n\n| x |\n|---|\n| y |"
        assert parser.parse(text) == parser.parse(text)


@pytest.mark.unit
class TestFrontMatter:
    """Test leading YAML front matter handling."""

    def test_front_matter_hidden(self) -> None:
        """Test front matter is removed from the tree and kept as metadata."""
        doc = markdown_to_ast("---\ntitle: Doc\ntags: [a, b]\n---\n\n# Body")

        assert isinstance(doc.children[0], Heading)
        assert extract_text(doc.children[0]) == "Body"
        assert "title" not in extract_text(doc, joiner="")
        assert doc.metadata["front_matter"] == {"title": "Doc", "tags": ["a", "b"]}

    def test_front_matter_only(self) -> None:
        """Test a document holding only front matter has no blocks."""
        doc = markdown_to_ast("---\ntitle: Doc\n---\n")
        assert doc.children == []
        assert doc.metadata["front_matter"] == {"title": "Doc"}

    def test_crlf_front_matter(self) -> None:
        """Test front matter is recognized with Windows line endings."""
        doc = markdown_to_ast("---\r\ntitle: Doc\r\n---\r\nText")
        assert extract_text(doc) == "Text"

    def test_unclosed_block_kept(self) -> None:
        """Test a leading rule with no closing fence is ordinary markdown."""
        doc = markdown_to_ast("---\ntitle: Doc")
        assert "front_matter" not in doc.metadata
        assert "title: Doc" in extract_text(doc, joiner="")

    def test_non_mapping_block_kept(self) -> None:
        """Test a fenced block that is not a YAML mapping is left in place."""
        doc = markdown_to_ast("---\nJust a sentence.\n---\n\nMore")
        assert "front_matter" not in doc.metadata
        assert "Just a sentence." in extract_text(doc, joiner="")

    def test_front_matter_disabled(self) -> None:
        """Test the option keeps the block as markdown."""
        doc = markdown_to_ast("---\ntitle: Doc\n---\n\n# Body", MarkdownParserOptions(parse_frontmatter=False))
        assert "front_matter" not in doc.metadata
        assert "title: Doc" in extract_text(doc, joiner="")
