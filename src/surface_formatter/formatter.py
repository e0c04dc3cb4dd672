"""Formatting entry points.

Parses template source, builds one segment per top-level node, renders each
at depth 0 and joins the results with newlines.
"""

from typing import Optional, Sequence

from surface_formatter.exceptions import FormatterError
from surface_formatter.expression import ExpressionCanonicalizer, PythonExpressionCanonicalizer
from surface_formatter.markup.nodes import Node
from surface_formatter.markup.parser import parse
from surface_formatter.models.config import DEFAULT_CONFIG, FormatterConfig
from surface_formatter.renderer import render
from surface_formatter.segments import BLANK_LINE, Segment, build_segment
from surface_formatter.utils.logging import get_logger

logger = get_logger(__name__)


class Formatter:
    """Formatter bound to a configuration and an expression canonicalizer.

    Example:
        >>> formatter = Formatter()
        >>> formatter.format_string('<div   class=" box "  disabled=true></div>')
        '<div class="box" disabled />'
    """

    def __init__(
        self,
        config: Optional[FormatterConfig] = None,
        canonicalizer: Optional[ExpressionCanonicalizer] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.canonicalizer = canonicalizer or PythonExpressionCanonicalizer(
            line_length=self.config.expression_line_length
        )

    def format_string(self, source: str) -> str:
        """Format template source text.

        Args:
            source: Template source

        Returns:
            Formatted template (no trailing newline is added)

        Raises:
            MarkupParseError: If the source cannot be parsed
            ExpressionSyntaxError: If an embedded expression cannot be parsed
            MalformedInputError: If the parsed tree has an invalid shape
        """
        logger.debug("format_started", length=len(source))
        try:
            nodes = parse(source, macro_sentinel=self.config.macro_sentinel)
        except FormatterError as e:
            logger.error("markup_parse_error", error=str(e))
            raise
        return self.format_nodes(nodes)

    def format_nodes(self, nodes: Sequence[Node]) -> str:
        """Format an already parsed list of top-level nodes.

        Args:
            nodes: Top-level raw nodes

        Returns:
            Formatted template text

        Raises:
            ExpressionSyntaxError: If an embedded expression cannot be parsed
            MalformedInputError: If a node has an invalid shape
        """
        try:
            segments = [build_segment(node, self.canonicalizer, self.config) for node in nodes]
        except FormatterError as e:
            logger.error("segment_build_failed", error=str(e), error_type=type(e).__name__)
            raise

        segments = _strip_blank_edges([segment for segment in segments if segment is not None])

        result = "\n".join(render(segment, 0, self.config) for segment in segments)

        logger.debug("format_completed", nodes=len(nodes), length=len(result))
        return result


def _strip_blank_edges(segments: list[Segment]) -> list[Segment]:
    """Drop blank lines before the first and after the last top-level segment.

    A blank line at the document edge would re-parse as a single newline and
    vanish on the next pass.
    """
    start, end = 0, len(segments)
    while start < end and segments[start] == BLANK_LINE:
        start += 1
    while end > start and segments[end - 1] == BLANK_LINE:
        end -= 1
    return segments[start:end]


def format_string(
    source: str,
    config: Optional[FormatterConfig] = None,
    canonicalizer: Optional[ExpressionCanonicalizer] = None,
) -> str:
    """Format template source text.

    This is a convenience function that calls Formatter(config, canonicalizer).format_string().

    Args:
        source: Template source
        config: Formatter configuration (defaults to the standard layout)
        canonicalizer: Expression canonicalizer (defaults to Python expressions)

    Returns:
        Formatted template text
    """
    return Formatter(config, canonicalizer).format_string(source)
