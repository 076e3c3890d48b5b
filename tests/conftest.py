"""Pytest configuration and shared fixtures for typst2rsx tests."""

from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a user's real config file from leaking into tests."""
    monkeypatch.delenv("TYPST2RSX_CONFIG", raising=False)
    monkeypatch.setattr(
        "typst2rsx.config.DEFAULT_CONFIG_PATH", tmp_path / "no-such-config.yaml"
    )


@pytest.fixture
def simple_svg_content() -> str:
    """Return the text/tspan document from the README example."""
    return (
        '<svg><text x="10" y="20">Hello, '
        '<tspan font-weight="bold">Typst!</tspan></text></svg>'
    )


@pytest.fixture
def typst_svg_content() -> str:
    """Return SVG shaped like typst's own output: defs, symbols, use and paths."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<svg class="typst-doc" viewBox="0 0 120 40" width="120pt" height="40pt" xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
    <path class="typst-shape" fill="#ffffff" fill-rule="nonzero" d="M 0 0 v 40 h 120 v -40 Z "/>
    <g>
        <g transform="translate(10 25)">
            <g class="typst-text" transform="scale(1, -1)">
                <use xlink:href="#gA1" x="0" fill="#000000" fill-rule="nonzero"/>
            </g>
        </g>
    </g>
    <defs id="glyph">
        <symbol id="gA1" overflow="visible">
            <path d="M 1 2 L 3 4 Z " stroke="#000000" stroke-width="0.5" stroke-linecap="round"/>
        </symbol>
    </defs>
</svg>"""


@pytest.fixture
def temp_svg(tmp_path: Path, simple_svg_content: str) -> Generator[Path, None, None]:
    """Create a temporary SVG file for testing."""
    svg_path = tmp_path / "test.svg"
    svg_path.write_text(simple_svg_content, encoding="utf-8")
    yield svg_path


@pytest.fixture
def typst_svg(tmp_path: Path, typst_svg_content: str) -> Path:
    """Write the typst-shaped SVG to a temporary file."""
    svg_path = tmp_path / "typst.svg"
    svg_path.write_text(typst_svg_content, encoding="utf-8")
    return svg_path


@pytest.fixture
def malformed_svg(tmp_path: Path) -> Path:
    """Create an SVG file with a mismatched closing tag."""
    svg_path = tmp_path / "broken.svg"
    svg_path.write_text("<svg><a></b></svg>", encoding="utf-8")
    return svg_path


@pytest.fixture
def typst_source(tmp_path: Path) -> Path:
    """Create a minimal Typst document."""
    source = tmp_path / "doc.typ"
    source.write_text("= Hello\n$x^2$\n", encoding="utf-8")
    return source
