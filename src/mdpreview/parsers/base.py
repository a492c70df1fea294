#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/parsers/base.py
"""Base class for markdown parsers feeding the preview renderer.

The preview engine never parses markdown itself. A parser turns source text
into a ``Document`` tree and the renderer only ever sees that tree, so any
markdown library can be plugged in by subclassing ``BaseParser``.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from mdpreview.ast import Document
from mdpreview.exceptions import InvalidOptionsError
from mdpreview.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for markdown parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser-specific options

    Examples
    --------
    Creating a custom parser:

        >>> from mdpreview.ast import Document, Paragraph, Text
        >>> class PlainTextParser(BaseParser):
        ...     def parse(self, text):
        ...         return Document(children=[Paragraph(content=[Text(content=text)])])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, text: str) -> Document:
        """Parse markdown source into a document tree.

        Parameters
        ----------
        text : str
            Markdown source

        Returns
        -------
        Document
            Parsed document tree

        Raises
        ------
        ParsingError
            If the source cannot be parsed

        """
        pass
