"""Raw node model produced by the markup parser.

Nodes are plain frozen dataclasses. Attribute and child order is exactly the
order of the source; nothing downstream reorders them.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class StringValue:
    """Quoted attribute value, e.g. ``class="box"``."""

    value: str


@dataclass(frozen=True)
class BoolValue:
    """Boolean attribute value; a bare attribute name is ``True``."""

    value: bool


@dataclass(frozen=True)
class NumberValue:
    """Numeric attribute value, kept as the literal text from the source."""

    literal: str


@dataclass(frozen=True)
class ExpressionValue:
    """Attribute value given as an embedded expression, e.g. ``items={{ cart }}``."""

    code: str


AttributeValue = Union[StringValue, BoolValue, NumberValue, ExpressionValue]


@dataclass(frozen=True)
class Attribute:
    """Single attribute of an element.

    Attributes:
        name: Attribute name as written
        value: Typed attribute value
    """

    name: str
    value: AttributeValue


@dataclass(frozen=True)
class Text:
    """Literal text between tags. May be whitespace only."""

    raw: str


@dataclass(frozen=True)
class Interpolation:
    """Embedded expression placeholder, ``{{ expression }}``."""

    expression: str


@dataclass(frozen=True)
class Element:
    """Tag with its attributes and children.

    Attributes:
        tag: Tag name (macro tags start with the macro sentinel, e.g. ``#Raw``)
        attributes: Attributes in source order
        children: Child nodes in source order
    """

    tag: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list["Node"] = field(default_factory=list)


Node = Union[Text, Interpolation, Element]
