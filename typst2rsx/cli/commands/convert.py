"""Convert command - turn one Typst or SVG file into RSX."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from typst2rsx import Typst2RsxConverter
from typst2rsx.config import Config

err_console = Console(stderr=True)


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), help="Output file (default: stdout)")
@click.option("--indent", type=click.IntRange(min=0), help="Spaces per nesting level")
@click.option("--compact", is_flag=True, help="Emit everything on a single line")
@click.option("--strip-whitespace", is_flag=True, help="Drop whitespace-only text nodes")
@click.option("--typst", "typst_binary", help="typst executable to use for .typ inputs")
@click.option("--timeout", type=float, help="Compile timeout in seconds")
@click.pass_context
def convert(
    ctx: click.Context,
    input_file: Path,
    output: Path | None,
    indent: int | None,
    compact: bool,
    strip_whitespace: bool,
    typst_binary: str | None,
    timeout: float | None,
) -> None:
    """Convert a Typst document or SVG file to RSX.

    INPUT_FILE: .typ files are compiled with typst first; anything else is
    read as SVG.
    """
    obj = ctx.obj or {}
    config: Config = obj.get("config") or Config()

    overrides = {}
    if compact:
        overrides["indent"] = None
    elif indent is not None:
        overrides["indent"] = indent
    if timeout is not None:
        overrides["timeout"] = timeout

    converter = Typst2RsxConverter(
        config,
        keep_whitespace=False if strip_whitespace else None,
        typst_binary=typst_binary,
        **overrides,
    )
    result = converter.convert_file(input_file, output)

    if not result.success:
        stage = result.stage.value if result.stage else "convert"
        for error in result.errors:
            err_console.print(f"[red]Error ({stage}):[/red] {escape(error)}")
        raise SystemExit(1)

    if output is None:
        click.echo(result.output)
    else:
        err_console.print(f"[green]Wrote[/green] {escape(str(result.output_path))}")
