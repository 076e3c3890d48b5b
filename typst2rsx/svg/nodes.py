"""Node tree produced by the SVG parser.

A document is a single root :class:`Element`. Each element owns its
children outright; there are no parent pointers and no shared nodes, so the
tree is acyclic by construction.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Text:
    """Character data between tags, with entities already resolved."""

    content: str


@dataclass
class Element:
    """An SVG element.

    Attributes:
        tag: Tag name exactly as written in the source, prefix included.
        attributes: Attribute names to values, in source order.
        children: Child nodes in source order.
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def iter(self) -> Iterator[Element]:
        """Yield this element and all descendant elements depth-first."""
        stack: list[Element] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(
                child for child in reversed(element.children) if isinstance(child, Element)
            )

    def find_all(self, tag: str) -> list[Element]:
        return [element for element in self.iter() if element.tag == tag]

    def iter_text(self) -> Iterator[str]:
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Text):
                yield node.content
            else:
                stack.extend(reversed(node.children))

    @property
    def text(self) -> str:
        """All character data below this element, concatenated."""
        return "".join(self.iter_text())


Node = Union[Element, Text]
