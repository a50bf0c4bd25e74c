# ABOUTME: CLI package for Exifindex, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from exifindex.cli.commands import build_cmd, inspect_cmd


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="exifindex")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Exifindex - build the gallery image index from embedded metadata."""
    _configure_logging(verbose)


cli.add_command(build_cmd.build)
cli.add_command(inspect_cmd.inspect)
