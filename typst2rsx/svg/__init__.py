"""SVG parsing and the node tree for typst2rsx.

This subpackage provides:
- Safe, streaming SVG parsing (defusedxml SAX reader)
- The Element/Text node model
- Read-only styling views over path elements
"""

from typst2rsx.svg.nodes import Element, Node, Text
from typst2rsx.svg.parser import SVGTreeBuilder, parse_svg, parse_svg_string
from typst2rsx.svg.styling import PathStyle, iter_path_styles

__all__ = [
    "Element",
    "Node",
    "Text",
    "SVGTreeBuilder",
    "parse_svg",
    "parse_svg_string",
    "PathStyle",
    "iter_path_styles",
]
