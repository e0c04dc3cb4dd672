"""Segment building: raw parser nodes to a whitespace-normalised tree.

A segment is what the renderer needs and nothing more:

- ``StringSegment`` holds finished text. ``StringSegment("")`` is a
  deliberate blank line kept from the source.
- ``TagSegment`` holds a tag name, its attributes already rendered to
  strings, and child segments.

A node that should disappear from the output (insignificant whitespace)
builds to ``None``, which is never the same thing as a blank line.
"""

from dataclasses import dataclass
from typing import Optional, Union

from surface_formatter.exceptions import MalformedInputError
from surface_formatter.expression import ExpressionCanonicalizer
from surface_formatter.markup.nodes import (
    Attribute,
    BoolValue,
    Element,
    ExpressionValue,
    Interpolation,
    Node,
    NumberValue,
    StringValue,
    Text,
)
from surface_formatter.models.config import DEFAULT_CONFIG, FormatterConfig


@dataclass(frozen=True)
class StringSegment:
    """Finished text (a blank line when empty)."""

    text: str


@dataclass(frozen=True)
class TagSegment:
    """Tag ready for rendering.

    Attributes:
        tag: Tag name
        attributes: Rendered attribute strings in source order
        children: Child segments in source order
    """

    tag: str
    attributes: tuple[str, ...] = ()
    children: tuple["Segment", ...] = ()


Segment = Union[StringSegment, TagSegment]

BLANK_LINE = StringSegment("")


def build_segment(
    node: Node,
    canonicalizer: ExpressionCanonicalizer,
    config: FormatterConfig = DEFAULT_CONFIG,
) -> Optional[Segment]:
    """Build the segment for one raw node, recursively for its children.

    Args:
        node: Raw node from the markup parser
        canonicalizer: Canonicalizer for interpolations and attribute expressions
        config: Formatter configuration (macro sentinel)

    Returns:
        The node's segment, or None if the node is dropped from the output

    Raises:
        MalformedInputError: If the node does not have a valid shape
        ExpressionSyntaxError: If an embedded expression cannot be parsed
    """
    if isinstance(node, Interpolation):
        return StringSegment("{{ " + canonicalizer.canonicalize(node.expression) + " }}")

    if isinstance(node, Text):
        return _text_segment(node.raw)

    if isinstance(node, Element):
        attributes = tuple(render_attribute(attribute, canonicalizer) for attribute in node.attributes)

        if node.tag.startswith(config.macro_sentinel):
            return TagSegment(node.tag, attributes, (_macro_body(node),))

        children = (build_segment(child, canonicalizer, config) for child in node.children)
        return TagSegment(node.tag, attributes, tuple(child for child in children if child is not None))

    raise MalformedInputError(type(node).__name__, "Unsupported node type")


def _text_segment(raw: str) -> Optional[StringSegment]:
    trimmed = raw.strip()
    if trimmed:
        return StringSegment(trimmed)

    # Whitespace only: two or more newlines mean the author left a blank line
    if raw.count("\n") > 1:
        return BLANK_LINE
    return None


def _macro_body(element: Element) -> StringSegment:
    """The raw text inside a macro tag, kept verbatim."""
    if len(element.children) != 1:
        raise MalformedInputError(
            f"<{element.tag}>",
            f"Macro tag must have exactly one child, found {len(element.children)}",
        )

    body = element.children[0]
    if not isinstance(body, Text):
        raise MalformedInputError(f"<{element.tag}>", "Macro tag body must be raw text")

    return StringSegment(body.raw)


def render_attribute(attribute: Attribute, canonicalizer: ExpressionCanonicalizer) -> str:
    """Render one attribute in canonical form.

    Examples:
        class="box", disabled, hidden=false, width=6, items={{ cart.items }}

    String values are double-quoted unless they contain a double quote, in
    which case the single quotes of the source are kept.

    Args:
        attribute: Raw attribute
        canonicalizer: Canonicalizer for expression values

    Returns:
        Attribute text as it appears in the opening tag

    Raises:
        MalformedInputError: If the attribute value has an unknown type
        ExpressionSyntaxError: If an expression value cannot be parsed
    """
    name, value = attribute.name, attribute.value

    if isinstance(value, StringValue):
        text = value.value.strip()
        if '"' not in text:
            return f'{name}="{text}"'
        if "'" not in text:
            return f"{name}='{text}'"
        raise MalformedInputError(name, "String value contains both quote characters")

    if isinstance(value, BoolValue):
        # A bare attribute name is shorthand for true
        return name if value.value else f"{name}=false"

    if isinstance(value, NumberValue):
        return f"{name}={value.literal}"

    if isinstance(value, ExpressionValue):
        # Canonicalize as a list so keyword sugar like `active: flag` parses,
        # then drop the brackets again
        expression = canonicalizer.canonicalize("[" + value.code + "]")[1:-1]

        if "\n" in expression:
            # No padding: the canonical lines already carry their indentation
            return f"{name}={{{{{expression}}}}}"
        return f"{name}={{{{ {expression} }}}}"

    raise MalformedInputError(name, f"Unsupported attribute value {type(value).__name__}")
