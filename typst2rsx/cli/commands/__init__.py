"""CLI commands for typst2rsx."""

from typst2rsx.cli.commands.batch import batch
from typst2rsx.cli.commands.convert import convert
from typst2rsx.cli.commands.paths import paths

__all__ = ["convert", "batch", "paths"]
