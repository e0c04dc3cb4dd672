"""Template markup: raw node model and parser."""

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
from surface_formatter.markup.parser import parse

__all__ = [
    "Attribute",
    "BoolValue",
    "Element",
    "ExpressionValue",
    "Interpolation",
    "Node",
    "NumberValue",
    "StringValue",
    "Text",
    "parse",
]
