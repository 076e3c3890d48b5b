"""Command line interface for typst2rsx."""

from typst2rsx.cli.main import cli, main

__all__ = ["cli", "main"]
