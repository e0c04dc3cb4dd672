"""Canonicalization of embedded expressions.

Templates embed Python expressions in ``{{ ... }}`` interpolations and
attribute values. The formatter never changes what an expression means; it
only asks an :class:`ExpressionCanonicalizer` for the canonical spelling of
the fragment.

The default :class:`PythonExpressionCanonicalizer` parses fragments with
:mod:`ast` and prints them back with :func:`ast.unparse`. List displays get
special treatment so that attribute values can use keyword sugar::

    class={{ "btn", active: is_active }}

is canonicalized as the list ``["btn", active: is_active]``, where
``active: is_active`` is kept as a ``name: value`` pair with a canonical
value. Lists that do not fit on one line are exploded one item per line.
"""

import ast
import io
import keyword
import tokenize
from typing import Protocol

from surface_formatter.exceptions import ExpressionSyntaxError
from surface_formatter.utils.logging import get_logger

logger = get_logger(__name__)

# Indentation of list items when a list is exploded over several lines
ITEM_INDENT = "  "

_LAYOUT_TOKENS = {
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.COMMENT,
    tokenize.ENDMARKER,
}
_OPENERS = {"(", "[", "{"}
_CLOSERS = {")", "]", "}"}


class ExpressionCanonicalizer(Protocol):
    """Anything that can turn a code fragment into its canonical text."""

    def canonicalize(self, code: str) -> str:
        """Return the canonical form of ``code``.

        Raises:
            ExpressionSyntaxError: If ``code`` cannot be parsed
        """
        ...


class PythonExpressionCanonicalizer:
    """Canonicalize Python expression fragments.

    Args:
        line_length: Longest single-line list display before its items are
            placed on separate lines

    Example:
        >>> canonicalizer = PythonExpressionCanonicalizer()
        >>> canonicalizer.canonicalize("foo( 1,2 )")
        'foo(1, 2)'
        >>> canonicalizer.canonicalize('[ "a",  b: 1 ]')
        "['a', b: 1]"
    """

    def __init__(self, line_length: int = 98):
        self.line_length = line_length

    def canonicalize(self, code: str) -> str:
        source = code.strip()
        if not source:
            raise ExpressionSyntaxError(code, "empty expression")

        tokens = _significant_tokens(source)
        if not _is_list_display(tokens):
            return _unparse(source)

        items = [_canonicalize_item(source, item) for item in _split_items(source, tokens)]
        return self._format_list(items)

    def _format_list(self, items: list[str]) -> str:
        single_line = "[" + ", ".join(items) + "]"
        if len(single_line) <= self.line_length:
            return single_line

        logger.debug("expression_list_exploded", items=len(items), length=len(single_line))
        return "[\n" + ",\n".join(ITEM_INDENT + item for item in items) + "\n]"


def _significant_tokens(source: str) -> list[tokenize.TokenInfo]:
    """Tokenize ``source`` and drop layout-only tokens."""
    try:
        return [
            token
            for token in tokenize.generate_tokens(io.StringIO(source).readline)
            if token.type not in _LAYOUT_TOKENS
        ]
    except (tokenize.TokenError, SyntaxError) as e:
        raise ExpressionSyntaxError(source, str(e)) from e


def _is_list_display(tokens: list[tokenize.TokenInfo]) -> bool:
    """True if the tokens form exactly one ``[...]`` that is not a comprehension."""
    if len(tokens) < 2 or tokens[0].string != "[" or tokens[-1].string != "]":
        return False

    depth = 0
    last = len(tokens) - 1
    for index, token in enumerate(tokens):
        if token.type == tokenize.OP and token.string in _OPENERS:
            depth += 1
        elif token.type == tokenize.OP and token.string in _CLOSERS:
            depth -= 1
            if depth == 0 and index != last:
                return False
        elif depth == 1 and token.type == tokenize.NAME and token.string == "for":
            return False
    return True


def _split_items(source: str, tokens: list[tokenize.TokenInfo]) -> list[list[tokenize.TokenInfo]]:
    """Split the tokens inside the outer brackets at top-level commas.

    A single trailing comma is allowed; any other empty item is an error.
    """
    items: list[list[tokenize.TokenInfo]] = []
    current: list[tokenize.TokenInfo] = []
    depth = 0

    for token in tokens[1:-1]:
        if token.type == tokenize.OP and token.string in _OPENERS:
            depth += 1
        elif token.type == tokenize.OP and token.string in _CLOSERS:
            depth -= 1
        elif depth == 0 and token.type == tokenize.OP and token.string == ",":
            if not current:
                raise ExpressionSyntaxError(source, "empty list item")
            items.append(current)
            current = []
            continue
        current.append(token)

    if current:
        items.append(current)
    return items


def _canonicalize_item(source: str, item: list[tokenize.TokenInfo]) -> str:
    first = item[0]
    if (
        len(item) >= 2
        and first.type == tokenize.NAME
        and not keyword.iskeyword(first.string)
        and item[1].type == tokenize.OP
        and item[1].string == ":"
    ):
        # Keyword sugar: name: value
        if len(item) == 2:
            raise ExpressionSyntaxError(source, f"missing value for {first.string!r}")
        value = _slice(source, item[2], item[-1])
        return f"{first.string}: {_unparse_element(value)}"

    return _unparse_element(_slice(source, first, item[-1]))


def _slice(source: str, first: tokenize.TokenInfo, last: tokenize.TokenInfo) -> str:
    # Same line splitting as tokenize (only "\n"), unlike str.splitlines
    line_offsets = [0]
    for line in io.StringIO(source).readlines():
        line_offsets.append(line_offsets[-1] + len(line))

    start = line_offsets[first.start[0] - 1] + first.start[1]
    end = line_offsets[last.end[0] - 1] + last.end[1]
    return source[start:end]


def _parse(code: str, wrapped: str) -> ast.Expression:
    try:
        return ast.parse(wrapped, mode="eval")
    except SyntaxError as e:
        raise ExpressionSyntaxError(code, e.msg) from e


def _unparse(code: str) -> str:
    # Parentheses allow line breaks anywhere in the fragment
    return ast.unparse(_parse(code, "(\n" + code + "\n)"))


def _unparse_element(code: str) -> str:
    """Canonicalize one list item (which may be a starred expression)."""
    tree = _parse(code, "[\n" + code + "\n]")
    if not isinstance(tree.body, ast.List) or len(tree.body.elts) != 1:
        raise ExpressionSyntaxError(code, "expected a single list item")
    return ast.unparse(tree.body.elts[0])
