"""typst2rsx: Embed Typst output as native Dioxus RSX markup.

This library provides:
- A safe, streaming SVG parser building an ordered Element/Text tree
- An RSX emitter with total string escaping and identifier mapping
- A thin wrapper around the external typst compiler
- A click-based command line interface

Example:
    >>> from typst2rsx import Typst2RsxConverter
    >>> converter = Typst2RsxConverter()
    >>> converter.svg_to_rsx('<svg><rect width="5"/></svg>')
    'svg {\\n    rect {\\n        width: "5",\\n    }\\n}'
"""

from typst2rsx.api import ConversionResult, Stage, Typst2RsxConverter
from typst2rsx.config import Config
from typst2rsx.exceptions import (
    ConfigError,
    DuplicateAttributeError,
    ExternalCompileError,
    InvalidEntityError,
    MalformedXmlError,
    MismatchedTagError,
    MultipleRootElementsError,
    NoRootElementError,
    OutputWriteError,
    RenderError,
    SourceReadError,
    SVGParseError,
    Typst2RsxError,
    UnclosedElementError,
)
from typst2rsx.render import render_rsx
from typst2rsx.svg import Element, Text, parse_svg, parse_svg_string

__version__ = "0.1.0"

__all__ = [
    # Main API
    "Typst2RsxConverter",
    "ConversionResult",
    "Stage",
    "Config",
    # Building blocks
    "Element",
    "Text",
    "parse_svg",
    "parse_svg_string",
    "render_rsx",
    # Exceptions
    "Typst2RsxError",
    "ConfigError",
    "SourceReadError",
    "OutputWriteError",
    "ExternalCompileError",
    "SVGParseError",
    "MalformedXmlError",
    "MismatchedTagError",
    "UnclosedElementError",
    "NoRootElementError",
    "MultipleRootElementsError",
    "InvalidEntityError",
    "DuplicateAttributeError",
    "RenderError",
    # Metadata
    "__version__",
]
