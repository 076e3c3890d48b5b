"""Emit a node tree as nested RSX component calls.

Output for ``<svg><rect width="5"/><text>Hi</text></svg>``::

    svg {
        rect {
            width: "5",
        }
        text {
            "Hi"
        }
    }
"""

from __future__ import annotations

import logging

from typst2rsx.exceptions import RenderError
from typst2rsx.render.rsx import attribute_key, quote, tag_identifier
from typst2rsx.svg.nodes import Element, Node, Text

logger = logging.getLogger(__name__)


class RsxEmitter:
    """Renders :class:`Element` trees to RSX source text.

    The walk is iterative, so tree depth is bounded only by memory.
    """

    def __init__(self, indent: int | None = 4, keep_whitespace: bool = True) -> None:
        """Initialize emitter.

        Args:
            indent: Spaces per nesting level, or None for single-line output.
            keep_whitespace: When False, text nodes consisting only of
                whitespace are left out.
        """
        if indent is not None and indent < 0:
            raise ValueError(f"indent must be >= 0 or None, got {indent}")
        self.indent = indent
        self.keep_whitespace = keep_whitespace

    def render(self, root: Element) -> str:
        """Render ``root`` and everything below it."""
        if not isinstance(root, Element):
            raise RenderError(f"Expected an Element root, got {type(root).__name__}")

        lines: list[str] = []
        # (node, depth, closing) - closing entries emit the block's "}"
        stack: list[tuple[Node, int, bool]] = [(root, 0, False)]
        while stack:
            node, depth, closing = stack.pop()
            pad = self._pad(depth)
            if closing:
                lines.append(f"{pad}}}")
                continue
            if isinstance(node, Text):
                lines.append(pad + quote(node.content))
                continue

            children = self._children(node)
            ident = tag_identifier(node.tag)
            if not node.attributes and not children:
                lines.append(f"{pad}{ident} {{}}")
                continue

            lines.append(f"{pad}{ident} {{")
            inner = self._pad(depth + 1)
            for key, value in _attribute_items(node):
                lines.append(f"{inner}{key}: {quote(value)},")
            stack.append((node, depth, True))
            stack.extend((child, depth + 1, False) for child in reversed(children))

        logger.debug("Rendered <%s> into %d RSX lines", root.tag, len(lines))
        return ("\n" if self.indent is not None else " ").join(lines)

    def _pad(self, depth: int) -> str:
        if self.indent is None:
            return ""
        return " " * (self.indent * depth)

    def _children(self, element: Element) -> list[Node]:
        if self.keep_whitespace:
            return element.children
        return [
            child
            for child in element.children
            if not (isinstance(child, Text) and not child.content.strip())
        ]


def _attribute_items(element: Element) -> list[tuple[str, str]]:
    """Pair each attribute value with a key unique within ``element``.

    When mapping makes a name collide with an earlier key, e.g.
    ``stroke_width`` after ``stroke-width``, the later attribute is keyed by
    its quoted source name instead.
    """
    items: list[tuple[str, str]] = []
    seen: set[str] = set()
    for name, value in element.attributes.items():
        key = attribute_key(name)
        if key in seen:
            key = quote(name)
        if key in seen:
            raise RenderError(
                f"Attribute {name!r} on <{element.tag}> collides with another key"
            )
        seen.add(key)
        items.append((key, value))
    return items


def render_rsx(root: Element, indent: int | None = 4, keep_whitespace: bool = True) -> str:
    """Render ``root`` as RSX source text with a one-off :class:`RsxEmitter`."""
    return RsxEmitter(indent=indent, keep_whitespace=keep_whitespace).render(root)
