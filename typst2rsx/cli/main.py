"""Command line entry point for typst2rsx."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from typst2rsx import __version__
from typst2rsx.cli.commands import batch, convert, paths
from typst2rsx.config import LOG_LEVELS, Config
from typst2rsx.exceptions import ConfigError

err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Route library logging to stderr through rich."""
    root = logging.getLogger("typst2rsx")
    root.handlers[:] = [
        RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    ]
    root.setLevel(level)
    root.propagate = False


@click.group()
@click.version_option(__version__, prog_name="typst2rsx")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging verbosity (default from config, else WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Convert Typst documents and SVG files to Dioxus RSX markup."""
    ctx.ensure_object(dict)
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/red] {escape(str(e))}")
        raise SystemExit(1) from e

    level = (log_level or config.log_level).upper()
    setup_logging(level)
    ctx.obj["config"] = config
    ctx.obj["log_level"] = level


cli.add_command(convert)
cli.add_command(batch)
cli.add_command(paths)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
