"""RSX code generation for typst2rsx.

This subpackage provides:
- Name mapping and string literal escaping for the rsx! dialect
- The tree emitter producing nested component calls
"""

from typst2rsx.render.emitter import RsxEmitter, render_rsx
from typst2rsx.render.rsx import attribute_key, map_name, quote, tag_identifier, unquote

__all__ = [
    "RsxEmitter",
    "render_rsx",
    "attribute_key",
    "map_name",
    "quote",
    "tag_identifier",
    "unquote",
]
