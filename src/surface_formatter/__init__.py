"""surface-formatter - Canonical formatting for component templates.

Parses templates made of tags, attributes, text and ``{{ expression }}``
interpolations and prints them back with consistent indentation, attribute
wrapping and whitespace.

Example:
    >>> from surface_formatter import format_string
    >>> format_string('<div class="box"   disabled></div>')
    '<div class="box" disabled />'
"""

__version__ = "0.1.0"

from surface_formatter.formatter import Formatter, format_string
from surface_formatter.exceptions import (
    ExpressionSyntaxError,
    FormatterError,
    MalformedInputError,
    MarkupParseError,
)
from surface_formatter.models.config import FormatterConfig

__all__ = [
    "Formatter",
    "format_string",
    "FormatterConfig",
    "FormatterError",
    "ExpressionSyntaxError",
    "MalformedInputError",
    "MarkupParseError",
]
