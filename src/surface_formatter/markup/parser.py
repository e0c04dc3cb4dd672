"""Template markup parser.

Parses component-template source text (HTML-like tags, quoted and embedded
expression attributes, ``{{ expression }}`` interpolations) into the raw node
tree defined in :mod:`surface_formatter.markup.nodes`.

The parser keeps every byte of text it does not structurally own: text runs,
comments and the bodies of macro tags are returned as ``Text`` nodes with
their whitespace intact. Whitespace normalisation is the segment builder's
job, not the parser's.
"""

import re
from typing import Optional

from surface_formatter.exceptions import MarkupParseError
from surface_formatter.markup.nodes import (
    Attribute,
    AttributeValue,
    BoolValue,
    Element,
    ExpressionValue,
    Interpolation,
    Node,
    NumberValue,
    StringValue,
    Text,
)

# Elements that never have children, even without a "/>"
VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta",
    "param", "source", "track", "wbr",
}

_ATTR_NAME = re.compile(r"[A-Za-z_:@][A-Za-z0-9_.:@\-]*")
_UNQUOTED_VALUE = re.compile(
    r"(?P<bool>true|false)(?=[\s/>]|\Z)|(?P<number>-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)(?=[\s/>]|\Z)"
)
_WHITESPACE = re.compile(r"\s*")


def parse(source: str, macro_sentinel: str = "#") -> list[Node]:
    """Parse template source into a list of top-level nodes.

    Args:
        source: Template source text
        macro_sentinel: Character that marks macro tags (their body is kept raw)

    Returns:
        Top-level nodes in source order

    Raises:
        MarkupParseError: If the source is not well-formed

    Examples:
        >>> parse('<div class="box" disabled />')
        [Element(tag='div', attributes=[...], children=[])]
    """
    return _MarkupParser(source, macro_sentinel).parse()


class _MarkupParser:
    """Recursive-descent parser over a single source string."""

    def __init__(self, source: str, macro_sentinel: str):
        self.source = source.replace("\r\n", "\n")
        self.pos = 0
        self.macro_sentinel = macro_sentinel

        sentinel = re.escape(macro_sentinel)
        self._tag_name = re.compile(r"[A-Za-z" + sentinel + r"][A-Za-z0-9_.:\-]*")
        self._tag_start = re.compile(r"<(?=[A-Za-z" + sentinel + r"])")
        self._text_end = re.compile(r"<(?=[/!A-Za-z" + sentinel + r"])|\{\{")

    def parse(self) -> list[Node]:
        return self._parse_nodes(parent=None)

    def _parse_nodes(self, parent: Optional[tuple[str, int]]) -> list[Node]:
        """Parse sibling nodes until end of input or a closing tag.

        Args:
            parent: (tag, start offset) of the enclosing element, None at top level

        Returns:
            Sibling nodes; the closing tag itself is left for the caller
        """
        nodes: list[Node] = []

        while self.pos < len(self.source):
            if self.source.startswith("</", self.pos):
                if parent is None:
                    self._error("Unexpected closing tag", self.pos)
                return nodes

            if self.source.startswith("<!--", self.pos):
                nodes.append(self._parse_comment())
            elif self.source.startswith("{{", self.pos):
                nodes.append(Interpolation(self._parse_expression()))
            elif self._tag_start.match(self.source, self.pos):
                nodes.append(self._parse_element())
            else:
                nodes.append(self._parse_text())

        if parent is not None:
            tag, start = parent
            self._error(f"Unclosed tag <{tag}>", start)

        return nodes

    def _parse_text(self) -> Text:
        # The current character never starts a construct, so search past it
        match = self._text_end.search(self.source, self.pos + 1)
        end = match.start() if match else len(self.source)
        text = self.source[self.pos:end]
        self.pos = end
        return Text(text)

    def _parse_comment(self) -> Text:
        end = self.source.find("-->", self.pos + 4)
        if end == -1:
            self._error("Unterminated comment", self.pos)
        comment = self.source[self.pos:end + 3]
        self.pos = end + 3
        return Text(comment)

    def _parse_expression(self) -> str:
        """Consume ``{{ ... }}`` and return the code between the braces.

        The closing ``}}`` is searched for outside string literals and
        nested braces, so dict and set literals are allowed inside.
        """
        start = self.pos
        i = start + 2
        depth = 0
        source = self.source

        while i < len(source):
            ch = source[i]
            if ch in ("'", '"'):
                i = self._skip_string(i, start)
                continue
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0 and source.startswith("}}", i):
                    self.pos = i + 2
                    return source[start + 2:i]
                if depth > 0:
                    depth -= 1
            i += 1

        self._error("Unterminated expression", start)

    def _skip_string(self, i: int, expression_start: int) -> int:
        """Return the offset just past the string literal opening at ``i``."""
        quote = self.source[i]
        j = i + 1
        while j < len(self.source):
            if self.source[j] == "\\":
                j += 2
                continue
            if self.source[j] == quote:
                return j + 1
            j += 1
        self._error("Unterminated expression", expression_start)

    def _parse_element(self) -> Element:
        start = self.pos
        self.pos += 1  # "<"
        tag = self._expect(self._tag_name, "Expected tag name")
        attributes = self._parse_attributes(tag, start)

        if self.source.startswith("/>", self.pos):
            self.pos += 2
            return Element(tag, attributes, [])

        self.pos += 1  # ">"

        # Case-sensitive: <Link> is a component, <link> is void
        if tag in VOID_ELEMENTS:
            return Element(tag, attributes, [])

        if tag.startswith(self.macro_sentinel):
            return Element(tag, attributes, [Text(self._parse_macro_body(tag, start))])

        children = self._parse_nodes(parent=(tag, start))
        self._parse_closing_tag(tag)
        return Element(tag, attributes, children)

    def _parse_macro_body(self, tag: str, start: int) -> str:
        """Consume a macro tag body verbatim, including its closing tag.

        One leading newline and the final newline (with the closing tag's
        indentation) are not part of the body.
        """
        closing = re.compile(r"</" + re.escape(tag) + r"\s*>")
        match = closing.search(self.source, self.pos)
        if match is None:
            self._error(f"Unclosed tag <{tag}>", start)

        body = self.source[self.pos:match.start()]
        self.pos = match.end()

        if body.startswith("\n"):
            body = body[1:]
        return re.sub(r"\n[ \t]*\Z", "", body)

    def _parse_closing_tag(self, tag: str) -> None:
        start = self.pos
        self.pos += 2  # "</"
        name = self._expect(self._tag_name, "Expected tag name")
        self._skip_whitespace()
        if not self.source.startswith(">", self.pos):
            self._error(f"Unterminated closing tag </{name}>", start)
        self.pos += 1

        if name != tag:
            self._error(f"Mismatched closing tag: expected </{tag}>, found </{name}>", start)

    def _parse_attributes(self, tag: str, start: int) -> list[Attribute]:
        attributes = []
        while True:
            self._skip_whitespace()
            if self.pos >= len(self.source):
                self._error(f"Unterminated tag <{tag}>", start)
            if self.source.startswith("/>", self.pos) or self.source.startswith(">", self.pos):
                return attributes
            attributes.append(self._parse_attribute())

    def _parse_attribute(self) -> Attribute:
        name = self._expect(_ATTR_NAME, "Expected attribute name")
        self._skip_whitespace()

        if not self.source.startswith("=", self.pos):
            # A bare attribute name is shorthand for true
            return Attribute(name, BoolValue(True))

        self.pos += 1
        self._skip_whitespace()
        return Attribute(name, self._parse_attribute_value(name))

    def _parse_attribute_value(self, name: str) -> AttributeValue:
        start = self.pos
        if start >= len(self.source):
            self._error(f"Missing value for attribute {name!r}", start)

        ch = self.source[start]
        if ch in ("'", '"'):
            end = self.source.find(ch, start + 1)
            if end == -1:
                self._error(f"Unterminated value for attribute {name!r}", start)
            self.pos = end + 1
            return StringValue(self.source[start + 1:end])

        if self.source.startswith("{{", start):
            return ExpressionValue(self._parse_expression())

        match = _UNQUOTED_VALUE.match(self.source, start)
        if match is None:
            self._error(f"Invalid value for attribute {name!r}", start)
        self.pos = match.end()

        if match.group("bool"):
            return BoolValue(match.group("bool") == "true")
        return NumberValue(match.group("number"))

    def _expect(self, pattern: re.Pattern, message: str) -> str:
        match = pattern.match(self.source, self.pos)
        if match is None:
            self._error(message, self.pos)
        self.pos = match.end()
        return match.group(0)

    def _skip_whitespace(self) -> None:
        self.pos = _WHITESPACE.match(self.source, self.pos).end()

    def _error(self, message: str, offset: int) -> None:
        line = self.source.count("\n", 0, offset) + 1
        column = offset - (self.source.rfind("\n", 0, offset) + 1) + 1
        raise MarkupParseError(message, line, column)
