"""Segment tree renderer.

Turns segments into indented template text. Rendering is a pure function of
a segment and its depth; the only layout decision besides indentation is
whether an opening tag fits on one line.
"""

from typing import Optional

from surface_formatter.models.config import DEFAULT_CONFIG, FormatterConfig
from surface_formatter.segments import Segment, StringSegment, TagSegment
from surface_formatter.utils.logging import get_logger

logger = get_logger(__name__)


def render(
    segment: Optional[Segment],
    depth: int = 0,
    config: FormatterConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """Render a segment at the given indentation depth.

    Args:
        segment: Segment to render (None renders nothing)
        depth: Indentation level of the segment
        config: Formatter configuration

    Returns:
        Rendered text, "" for a blank line, or None for no output at all
    """
    if segment is None:
        return None

    if isinstance(segment, StringSegment):
        if segment.text == "":
            # Joined with its siblings this becomes an empty line
            return ""
        return _indentation(depth, config) + segment.text

    return _render_tag(segment, depth, config)


def _render_tag(segment: TagSegment, depth: int, config: FormatterConfig) -> str:
    tag, attributes, children = segment.tag, segment.attributes, segment.children
    self_closing = not children
    indentation = _indentation(depth, config)

    joined_attributes = " " + " ".join(attributes) if attributes else ""
    opening = "<" + tag + joined_attributes + (" /" if self_closing else "") + ">"

    if len(opening) > config.max_line_length:
        logger.debug("opening_tag_wrapped", tag=tag, length=len(opening), depth=depth)
        opening = "\n".join(
            [
                "<" + tag,
                *(indent(attribute, depth + 1, config) for attribute in attributes),
                indentation + ("/>" if self_closing else ">"),
            ]
        )

    if self_closing:
        return indentation + opening

    # The raw body of a macro tag already carries its own indentation;
    # shifting it back this far leaves it untouched
    offset = config.macro_child_depth_offset if is_macro_tag(tag, config) else 1
    rendered_children = (render(child, depth + offset, config) for child in children)
    children_block = "\n".join(child for child in rendered_children if child is not None)

    return f"{indentation}{opening}\n{children_block}\n{indentation}</{tag}>"


def indent(text: str, depth: int, config: FormatterConfig = DEFAULT_CONFIG) -> str:
    """Indent every line of ``text`` to ``depth`` levels.

    Keeps a multi-line attribute such as

        class={{
          "btn",
          active: active
        }}

    aligned under its tag.
    """
    indentation = _indentation(depth, config)
    return indentation + text.replace("\n", "\n" + indentation)


def is_macro_tag(tag: str, config: FormatterConfig = DEFAULT_CONFIG) -> bool:
    """True if ``tag`` names a macro tag (starts with the macro sentinel)."""
    return tag.startswith(config.macro_sentinel)


def _indentation(depth: int, config: FormatterConfig) -> str:
    # Negative depths (macro bodies near the top level) indent nothing
    return config.tab * max(depth, 0)
