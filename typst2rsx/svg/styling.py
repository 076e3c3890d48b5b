"""Read-only styling views over parsed SVG elements.

Typst draws glyphs and shapes as ``<path>`` elements carrying a small, fixed
set of presentation attributes. :class:`PathStyle` exposes those attributes
as optional fields. Values are passed through as the raw strings found in the
document; nothing is parsed or validated.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields

from typst2rsx.svg.nodes import Element

# Field name -> SVG attribute name
PATH_STYLE_ATTRIBUTES: dict[str, str] = {
    "d": "d",
    "fill": "fill",
    "stroke": "stroke",
    "stroke_width": "stroke-width",
    "stroke_linecap": "stroke-linecap",
    "stroke_linejoin": "stroke-linejoin",
    "stroke_miterlimit": "stroke-miterlimit",
    "fill_rule": "fill-rule",
    "class_name": "class",
}


@dataclass(frozen=True)
class PathStyle:
    """Styling and geometry attributes of a path-like shape."""

    d: str | None = None
    fill: str | None = None
    stroke: str | None = None
    stroke_width: str | None = None
    stroke_linecap: str | None = None
    stroke_linejoin: str | None = None
    stroke_miterlimit: str | None = None
    fill_rule: str | None = None
    class_name: str | None = None

    @classmethod
    def from_element(cls, element: Element) -> PathStyle:
        """Build the view by looking up each known attribute on ``element``."""
        return cls(
            **{
                field_name: element.get(attribute)
                for field_name, attribute in PATH_STYLE_ATTRIBUTES.items()
            }
        )

    def as_attributes(self) -> dict[str, str]:
        """Return the present fields keyed by their SVG attribute names."""
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[PATH_STYLE_ATTRIBUTES[f.name]] = value
        return result

    @property
    def is_stroked(self) -> bool:
        return self.stroke is not None and self.stroke != "none"


def iter_path_styles(root: Element) -> Iterator[tuple[Element, PathStyle]]:
    """Yield every ``path`` element below ``root`` with its style view."""
    for element in root.iter():
        if element.tag == "path":
            yield element, PathStyle.from_element(element)
