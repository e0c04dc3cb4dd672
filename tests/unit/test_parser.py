"""Unit tests for the template markup parser."""

import pytest

from surface_formatter.exceptions import MarkupParseError
from surface_formatter.markup import parse
from surface_formatter.markup.nodes import (
    Attribute,
    BoolValue,
    Element,
    ExpressionValue,
    Interpolation,
    NumberValue,
    StringValue,
    Text,
)


class TestParseText:
    """Tests for text and interpolation nodes."""

    def test_parse_empty_source(self):
        """Test parsing empty source."""
        assert parse("") == []

    def test_plain_text(self):
        """Test text without markup is a single text node, whitespace intact."""
        assert parse("  Hello\n world ") == [Text("  Hello\n world ")]

    def test_interpolation_splits_text(self):
        """Test interpolations become their own nodes with raw code."""
        assert parse("Hello {{ name }}!") == [
            Text("Hello "),
            Interpolation(" name "),
            Text("!"),
        ]

    def test_interpolation_with_nested_braces(self):
        """Test closing braces inside strings and dict literals do not end the expression."""
        assert parse('{{ {"a": "}}"} }}') == [Interpolation(' {"a": "}}"} ')]

    def test_less_than_in_text(self):
        """Test a '<' that does not start a tag is ordinary text."""
        assert parse("a < b") == [Text("a < b")]

    def test_comment_is_text(self):
        """Test comments are kept verbatim as text."""
        assert parse("<!-- note <b> -->") == [Text("<!-- note <b> -->")]

    def test_crlf_is_normalised(self):
        """Test Windows line endings are converted to newlines."""
        assert parse("<p>\r\nHi\r\n</p>") == [Element("p", [], [Text("\nHi\n")])]


class TestParseElements:
    """Tests for element and attribute parsing."""

    def test_self_closing_element(self):
        """Test a self-closing element with string and bare attributes."""
        assert parse('<div class="box" disabled />') == [
            Element(
                "div",
                [Attribute("class", StringValue("box")), Attribute("disabled", BoolValue(True))],
                [],
            )
        ]

    def test_nested_elements(self):
        """Test children are parsed between open and close tags."""
        nodes = parse("<ul>\n  <li>One</li>\n</ul>")

        assert nodes == [
            Element(
                "ul",
                [],
                [Text("\n  "), Element("li", [], [Text("One")]), Text("\n")],
            )
        ]

    def test_attribute_value_types(self):
        """Test every kind of attribute value."""
        nodes = parse("<Card title='Hi' width=6 ratio=-1.5 hidden=false on_click={{ save }} />")

        assert nodes[0].attributes == [
            Attribute("title", StringValue("Hi")),
            Attribute("width", NumberValue("6")),
            Attribute("ratio", NumberValue("-1.5")),
            Attribute("hidden", BoolValue(False)),
            Attribute("on_click", ExpressionValue(" save ")),
        ]

    def test_string_value_is_not_trimmed(self):
        """Test the parser keeps string values exactly as written."""
        nodes = parse('<p class="  a b  " />')

        assert nodes[0].attributes == [Attribute("class", StringValue("  a b  "))]

    def test_whitespace_around_equals(self):
        """Test whitespace is allowed around '='."""
        nodes = parse('<p id = "x"></p>')

        assert nodes[0].attributes == [Attribute("id", StringValue("x"))]

    def test_void_elements_have_no_children(self):
        """Test void elements do not need a closing tag."""
        assert parse("<br><hr>") == [Element("br", [], []), Element("hr", [], [])]

    def test_void_element_with_attributes(self):
        """Test void elements keep their attributes."""
        nodes = parse('<input type="text">')

        assert nodes == [Element("input", [Attribute("type", StringValue("text"))], [])]

    @pytest.mark.parametrize("tag", ["Link", "Input", "Source", "Meta"])
    def test_component_named_like_void_element(self, tag):
        """Test capitalised component tags are not void and take children."""
        nodes = parse(f'<{tag} to="/">Home</{tag}>')

        assert nodes == [Element(tag, [Attribute("to", StringValue("/"))], [Text("Home")])]

    def test_dotted_component_name(self):
        """Test component names may contain dots."""
        assert parse("<Foo.Bar />") == [Element("Foo.Bar", [], [])]

    def test_closing_tag_with_whitespace(self):
        """Test whitespace before '>' in a closing tag."""
        assert parse("<p>x</p >") == [Element("p", [], [Text("x")])]


class TestParseMacros:
    """Tests for macro tags, whose body is not parsed."""

    def test_macro_body_is_raw(self):
        """Test markup and interpolations inside a macro body stay text."""
        nodes = parse("<#Raw>\n  <b>{{ not parsed }}</b>\n</#Raw>")

        assert nodes == [Element("#Raw", [], [Text("  <b>{{ not parsed }}</b>")])]

    def test_macro_closing_indentation_is_not_body(self):
        """Test the indentation before the closing tag is not part of the body."""
        nodes = parse("<#Raw>\n    one\n      two\n    </#Raw>")

        assert nodes[0].children == [Text("    one\n      two")]

    def test_macro_with_attributes(self):
        """Test macro tags accept attributes like any tag."""
        nodes = parse('<#Code lang="py">x = {</#Code>')

        assert nodes == [Element("#Code", [Attribute("lang", StringValue("py"))], [Text("x = {")])]

    def test_custom_sentinel(self):
        """Test the macro sentinel can be changed."""
        nodes = parse("<%Raw>{{ x </%Raw>", macro_sentinel="%")

        assert nodes == [Element("%Raw", [], [Text("{{ x ")])]


class TestParseErrors:
    """Tests for malformed source."""

    @pytest.mark.parametrize(
        "source,message",
        [
            ("<div>", "Unclosed tag <div>"),
            ("</div>", "Unexpected closing tag"),
            ("<a></b>", "Mismatched closing tag"),
            ("{{ x", "Unterminated expression"),
            ("{{ 'x }}", "Unterminated expression"),
            ("<!-- x", "Unterminated comment"),
            ("<div", "Unterminated tag <div>"),
            ('<div class="x', "Unterminated value for attribute 'class'"),
            ("<div class=", "Missing value for attribute 'class'"),
            ("<div class=box>", "Invalid value for attribute 'class'"),
            ("<#Raw>body", "Unclosed tag <#Raw>"),
        ],
    )
    def test_malformed_source_raises(self, source, message):
        """Test malformed source raises MarkupParseError with a clear message."""
        with pytest.raises(MarkupParseError, match=message):
            parse(source)

    def test_error_position(self):
        """Test errors report 1-based line and column."""
        with pytest.raises(MarkupParseError) as exc_info:
            parse("<div\n  class=oops>")

        assert exc_info.value.line == 2
        assert exc_info.value.column == 9
        assert "line 2, column 9" in str(exc_info.value)

    def test_mismatched_closing_tag_position(self):
        """Test a mismatched closing tag is reported where it appears."""
        with pytest.raises(MarkupParseError) as exc_info:
            parse("<main>\n  <p>text\n</main>")

        # <p> is closed by </main>
        assert "Mismatched closing tag" in exc_info.value.message
        assert exc_info.value.line == 3
