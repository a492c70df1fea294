#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/highlighting.py
"""Code tokenizers used to color fenced code blocks.

The preview renderer only depends on the ``CodeTokenizer`` protocol: given
code and a language tag it returns character spans tagged with a color role.
``PygmentsTokenizer`` implements it with Pygments lexers.

An unknown language yields an empty span list, which the renderer displays as
plain untokenized text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from mdpreview.constants import DEPS_HIGHLIGHT, ColorRole
from mdpreview.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodeSpan:
    """A run of code characters sharing one color role.

    Parameters
    ----------
    start : int
        Offset of the first character (inclusive)
    end : int
        Offset after the last character (exclusive)
    color_role : str
        One of keyword, string, comment, number, name, operator, default

    """

    start: int
    end: int
    color_role: ColorRole

    def __post_init__(self) -> None:
        """Reject inverted spans."""
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")


@runtime_checkable
class CodeTokenizer(Protocol):
    """Tokenizer contract consumed by the preview renderer."""

    def tokenize(self, code: str, language: str) -> list[CodeSpan]:
        """Split ``code`` into colored spans; return [] for unknown languages."""
        ...


class NullTokenizer:
    """Tokenizer that never colors anything."""

    def tokenize(self, code: str, language: str) -> list[CodeSpan]:
        """Return no spans."""
        return []


def _role_for_token(token_type: Any) -> ColorRole:
    from pygments.token import Comment, Keyword, Name, Number, Operator, String

    if token_type in Comment:
        return "comment"
    if token_type in Keyword:
        return "keyword"
    if token_type in String:
        return "string"
    if token_type in Number:
        return "number"
    if token_type in Operator:
        return "operator"
    if token_type in Name:
        return "name"
    return "default"


class PygmentsTokenizer:
    """Code tokenizer backed by Pygments lexers.

    Lexers are looked up by alias (``python``, ``js``, ``rust``...) and
    cached per lower-cased language tag, including negative lookups.

    Examples
    --------
        >>> spans = PygmentsTokenizer().tokenize("x = 1", "python")
        >>> [s.color_role for s in spans]
        ['name', 'default', 'operator', 'default', 'number']

    """

    def __init__(self) -> None:
        """Initialize an empty lexer cache."""
        self._lexer_cache: dict[str, Any] = {}

    def _lexer_for_language(self, language: str) -> Any:
        from pygments.lexers import get_lexer_by_name
        from pygments.util import ClassNotFound

        cache_key = language.strip().lower()
        if cache_key in self._lexer_cache:
            return self._lexer_cache[cache_key]
        try:
            # Offsets must line up with the input, so no newline normalization
            lexer = get_lexer_by_name(cache_key, stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.debug(f"No lexer for language {language!r}, code will render untokenized")
            lexer = None
        self._lexer_cache[cache_key] = lexer
        return lexer

    @requires_dependencies("code highlighting", DEPS_HIGHLIGHT)
    def tokenize(self, code: str, language: str) -> list[CodeSpan]:
        """Split code into spans tagged with color roles.

        Parameters
        ----------
        code : str
            Source code to tokenize
        language : str
            Language tag from the fence info string (case-insensitive)

        Returns
        -------
        list of CodeSpan
            Adjacent spans with the same role are merged. Empty when the
            language is unknown.

        """
        from pygments import lex

        if not code or not language or not language.strip():
            return []

        lexer = self._lexer_for_language(language)
        if lexer is None:
            return []

        spans: list[CodeSpan] = []
        offset = 0
        for token_type, value in lex(code, lexer):
            if not value:
                continue
            end = min(offset + len(value), len(code))
            if end <= offset:
                break
            role = _role_for_token(token_type)
            if spans and spans[-1].color_role == role and spans[-1].end == offset:
                spans[-1] = CodeSpan(spans[-1].start, end, role)
            else:
                spans.append(CodeSpan(offset, end, role))
            offset = end
        return spans


__all__ = [
    "CodeSpan",
    "CodeTokenizer",
    "NullTokenizer",
    "PygmentsTokenizer",
]
