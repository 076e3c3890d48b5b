"""Paths command - report the path styling found in an SVG file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from typst2rsx.exceptions import Typst2RsxError
from typst2rsx.svg.parser import parse_svg
from typst2rsx.svg.styling import iter_path_styles

console = Console()
err_console = Console(stderr=True)


def _shorten(value: str | None, limit: int = 40) -> str:
    if value is None:
        return "-"
    return value[:limit] + "..." if len(value) > limit else value


@click.command()
@click.argument("svg_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--limit", type=click.IntRange(min=1), help="Show at most this many paths")
def paths(svg_file: Path, limit: int | None) -> None:
    """Report fill, stroke and geometry of every path in an SVG file."""
    try:
        root = parse_svg(svg_file)
    except Typst2RsxError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    table = Table(title=f"Paths in {escape(svg_file.name)}")
    table.add_column("Class", style="cyan")
    table.add_column("Fill", style="green")
    table.add_column("Stroke", style="yellow")
    table.add_column("Width", style="yellow")
    table.add_column("Rule", style="magenta")
    table.add_column("Data", style="dim")

    count = 0
    for _element, style in iter_path_styles(root):
        count += 1
        if limit is not None and count > limit:
            continue
        table.add_row(
            escape(_shorten(style.class_name)),
            escape(_shorten(style.fill)),
            escape(_shorten(style.stroke)),
            escape(_shorten(style.stroke_width)),
            escape(_shorten(style.fill_rule)),
            escape(_shorten(style.d)),
        )

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {count} paths")
