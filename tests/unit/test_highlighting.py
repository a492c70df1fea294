#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for code tokenizers."""

import pytest

from mdpreview.highlighting import CodeSpan, CodeTokenizer, NullTokenizer, PygmentsTokenizer


@pytest.mark.unit
class TestCodeSpan:
    """Test span validation."""

    def test_valid(self) -> None:
        """Test a normal span."""
        assert CodeSpan(0, 3, "keyword").end == 3

    @pytest.mark.parametrize("start,end", [(-1, 2), (5, 4)])
    def test_invalid(self, start: int, end: int) -> None:
        """Test negative and inverted spans are rejected."""
        with pytest.raises(ValueError):
            CodeSpan(start, end, "default")


@pytest.mark.unit
class TestPygmentsTokenizer:
    """Test the Pygments-backed tokenizer."""

    def test_protocol(self) -> None:
        """Test both tokenizers satisfy the protocol."""
        assert isinstance(PygmentsTokenizer(), CodeTokenizer)
        assert isinstance(NullTokenizer(), CodeTokenizer)

    def test_python_roles(self) -> None:
        """Test keywords, strings, numbers and comments are recognized."""
        code = 'def f():\n    return "s" + 1  # note'
        spans = PygmentsTokenizer().tokenize(code, "python")

        by_text = {code[span.start : span.end].strip(): span.color_role for span in spans}
        assert by_text["def"] == "keyword"
        assert by_text['"s"'] == "string"
        assert by_text["1"] == "number"
        assert by_text["# note"] == "comment"

    def test_spans_cover_code_in_order(self) -> None:
        """Test spans are contiguous, ordered and within bounds."""
        code = "for i in range(3):\n    print(i)\n"
        spans = PygmentsTokenizer().tokenize(code, "Python")

        assert spans[0].start == 0
        for previous, current in zip(spans, spans[1:]):
            assert previous.end == current.start
            assert previous.color_role != current.color_role
        assert spans[-1].end <= len(code)

    def test_unknown_language(self) -> None:
        """Test unknown languages produce no spans."""
        tokenizer = PygmentsTokenizer()
        assert tokenizer.tokenize("x = 1", "no-such-language") == []
        # Negative lookups are cached too
        assert tokenizer.tokenize("x = 1", "no-such-language") == []

    @pytest.mark.parametrize("code,language", [("", "python"), ("x", ""), ("x", "   ")])
    def test_empty_inputs(self, code: str, language: str) -> None:
        """Test empty code or language produce no spans."""
        assert PygmentsTokenizer().tokenize(code, language) == []

    def test_null_tokenizer(self) -> None:
        """Test the null tokenizer never colors."""
        assert NullTokenizer().tokenize("def f(): pass", "python") == []
