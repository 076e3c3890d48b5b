"""Batch command - convert many files concurrently."""

from __future__ import annotations

import concurrent.futures
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress

from typst2rsx import ConversionResult, Typst2RsxConverter
from typst2rsx.config import Config

console = Console(stderr=True)


def read_batch_file(batch_file: Path) -> list[Path]:
    """Read input paths from a list file, one per line; ``#`` starts a comment."""
    inputs: list[Path] = []
    with open(batch_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                inputs.append(Path(line))
    return inputs


@click.command()
@click.argument("inputs", nargs=-1, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), required=True, help="Output directory")
@click.option("--batch-file", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="File containing list of inputs")
@click.option("--suffix", default=".rsx", help="Output filename suffix")
@click.option("-j", "--jobs", type=click.IntRange(min=1), default=4, help="Parallel jobs")
@click.option("--continue-on-error", is_flag=True, help="Continue processing on errors")
@click.pass_context
def batch(
    ctx: click.Context,
    inputs: tuple[Path, ...],
    output_dir: Path,
    batch_file: Path | None,
    suffix: str,
    jobs: int,
    continue_on_error: bool,
) -> None:
    """Convert multiple Typst or SVG files to RSX.

    INPUTS: Paths to .typ or .svg files (supports glob patterns via shell).
    """
    obj = ctx.obj or {}
    config: Config = obj.get("config") or Config()

    all_inputs: list[Path] = list(inputs)
    if batch_file:
        all_inputs.extend(read_batch_file(batch_file))

    if not all_inputs:
        console.print("[red]Error:[/red] No input files specified")
        raise SystemExit(1)

    output_dir.mkdir(parents=True, exist_ok=True)

    # each worker call gets its own converter
    def process_file(input_path: Path) -> ConversionResult:
        converter = Typst2RsxConverter(config)
        output_path = output_dir / f"{input_path.stem}{suffix}"
        return converter.convert_file(input_path, output_path)

    success_count = 0
    error_count = 0

    with Progress(console=console) as progress:
        task = progress.add_task("[green]Converting...", total=len(all_inputs))

        with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
            future_to_path = {executor.submit(process_file, p): p for p in all_inputs}

            for future in concurrent.futures.as_completed(future_to_path):
                input_path = future_to_path[future]
                try:
                    result = future.result()
                    if result.success:
                        success_count += 1
                        continue
                    error_count += 1
                    console.print(
                        f"[red]Error in {escape(str(input_path))}:[/red] "
                        f"{escape('; '.join(result.errors))}"
                    )
                except Exception as e:
                    error_count += 1
                    console.print(
                        f"[red]Error processing {escape(str(input_path))}:[/red] "
                        f"{escape(str(e))}"
                    )
                finally:
                    progress.advance(task)

                if not continue_on_error:
                    for pending in future_to_path:
                        pending.cancel()
                    break

    console.print()
    console.print("[bold]Batch complete:[/bold]")
    console.print(f"  [green]Success:[/green] {success_count}")
    console.print(f"  [red]Failed:[/red] {error_count}")
    console.print(f"  [blue]Output:[/blue] {escape(str(output_dir))}")

    if error_count:
        raise SystemExit(1)
