"""Unit tests for typst2rsx.render.emitter."""

from __future__ import annotations

import re
from textwrap import dedent

import pytest

from typst2rsx.exceptions import RenderError
from typst2rsx.render.emitter import RsxEmitter, render_rsx
from typst2rsx.render.rsx import unquote
from typst2rsx.svg.nodes import Element, Text
from typst2rsx.svg.parser import parse_svg_string

_LITERAL_RE = re.compile(r'"(?:[^"\\]|\\.)*"')


class TestRenderElements:
    """Tests for element and attribute emission."""

    def test_text_and_tspan_example(self, simple_svg_content: str) -> None:
        """Nesting is reproduced and hyphenated names are mapped."""
        output = render_rsx(parse_svg_string(simple_svg_content))

        assert output == dedent(
            """\
            svg {
                text {
                    x: "10",
                    y: "20",
                    "Hello, "
                    tspan {
                        font_weight: "bold",
                        "Typst!"
                    }
                }
            }"""
        )

    def test_self_closing_rect(self) -> None:
        """An attribute-only element renders attributes in a block."""
        output = render_rsx(parse_svg_string('<rect width="5"/>'))

        assert output == 'rect {\n    width: "5",\n}'

    def test_empty_element_renders_empty_block(self) -> None:
        """No attributes and no children still yields a component call."""
        assert render_rsx(Element("g")) == "g {}"

    def test_empty_child_is_not_omitted(self) -> None:
        output = render_rsx(parse_svg_string("<svg><defs/><g></g></svg>"))

        assert output == "svg {\n    defs {}\n    g {}\n}"

    def test_attribute_order_follows_source(self) -> None:
        output = render_rsx(Element("path", {"d": "M0 0", "fill": "red", "class": "a"}))

        lines = output.splitlines()
        assert [line.split(":")[0].strip() for line in lines[1:-1]] == ["d", "fill", "class"]

    def test_keyword_and_namespaced_names(self, typst_svg_content: str) -> None:
        """use becomes r#use and xlink:href a quoted key."""
        output = render_rsx(parse_svg_string(typst_svg_content), keep_whitespace=False)

        assert "r#use {" in output
        assert '"xlink:href": "#gA1",' in output
        assert 'fill_rule: "nonzero",' in output
        assert 'viewBox: "0 0 120 40",' in output
        assert "-" not in "".join(_LITERAL_RE.sub("", output).split())

    def test_colliding_attribute_names_get_distinct_keys(self) -> None:
        """A name that maps onto an earlier key keeps its source spelling."""
        output = render_rsx(parse_svg_string('<svg stroke-width="1" stroke_width="2"/>'))

        assert output == 'svg {\n    stroke_width: "1",\n    "stroke_width": "2",\n}'

    def test_collision_with_hyphenated_name_second(self) -> None:
        output = render_rsx(Element("path", {"stroke_width": "2", "stroke-width": "1"}))

        assert output == 'path {\n    stroke_width: "2",\n    "stroke-width": "1",\n}'

    def test_unresolvable_key_collision_is_render_error(self) -> None:
        """Both candidate keys already taken cannot be rendered faithfully."""
        with pytest.raises(RenderError, match="collides"):
            render_rsx(Element("use", {"a:b-c": "1", "a:b_c": "2"}))

    def test_attribute_values_are_escaped(self) -> None:
        output = render_rsx(Element("text", {"data": 'a"b{c}\\'}))

        assert 'data: "a\\"b{{c}}\\\\",' in output


class TestRenderText:
    """Tests for text node emission."""

    def test_text_round_trips(self) -> None:
        """Emitted literals parse back to the original text."""
        original = 'He said "hi"\n\\ {ok}'
        output = render_rsx(Element("text", children=[Text(original)]))

        literal = output.splitlines()[1].strip()
        assert unquote(literal) == original

    def test_whitespace_text_kept_by_default(self) -> None:
        output = render_rsx(parse_svg_string("<svg>\n  <g/>\n</svg>"))

        assert output == 'svg {\n    "\\n  "\n    g {}\n    "\\n"\n}'

    def test_whitespace_text_can_be_dropped(self) -> None:
        output = render_rsx(parse_svg_string("<svg>\n  <g/>\n</svg>"), keep_whitespace=False)

        assert output == "svg {\n    g {}\n}"

    def test_whitespace_only_element_renders_empty_block(self) -> None:
        output = render_rsx(parse_svg_string("<svg><g>   </g></svg>"), keep_whitespace=False)

        assert output == "svg {\n    g {}\n}"

    def test_significant_spaces_are_kept(self) -> None:
        """Text with content keeps its surrounding spaces."""
        output = render_rsx(parse_svg_string("<text> a </text>"), keep_whitespace=False)

        assert '" a "' in output


class TestEmitterOptions:
    """Tests for formatting options."""

    def test_custom_indent(self) -> None:
        output = RsxEmitter(indent=2).render(parse_svg_string('<svg><rect x="1"/></svg>'))

        assert output == 'svg {\n  rect {\n    x: "1",\n  }\n}'

    def test_compact_output(self, simple_svg_content: str) -> None:
        output = RsxEmitter(indent=None).render(parse_svg_string(simple_svg_content))

        assert output == (
            'svg { text { x: "10", y: "20", "Hello, " '
            'tspan { font_weight: "bold", "Typst!" } } }'
        )

    def test_negative_indent_rejected(self) -> None:
        with pytest.raises(ValueError):
            RsxEmitter(indent=-1)

    def test_non_element_root_rejected(self) -> None:
        with pytest.raises(RenderError):
            RsxEmitter().render(Text("loose"))  # type: ignore[arg-type]

    def test_deep_tree_renders_without_recursion_limit(self) -> None:
        """Depth is not limited by the interpreter's recursion limit."""
        depth = 5000
        svg = "<g>" * depth + "</g>" * depth

        output = RsxEmitter(indent=None).render(parse_svg_string(svg))

        assert output.count("g {") == depth
        assert output.count("g {}") == 1
        assert output.count("}") == depth

    def test_emitter_is_reusable(self, simple_svg_content: str) -> None:
        """Rendering keeps no state between calls."""
        emitter = RsxEmitter()
        root = parse_svg_string(simple_svg_content)

        assert emitter.render(root) == emitter.render(root)
