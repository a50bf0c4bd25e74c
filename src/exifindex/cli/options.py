# ABOUTME: Shared Click options for Exifindex CLI commands.
# ABOUTME: Provides the --root option that anchors default input and output paths.

from pathlib import Path

import click

root_option = click.option(
    "--root",
    "root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=Path("."),
    envvar="EXIFINDEX_ROOT",
    show_envvar=True,
    help="Repository root; record paths are relative to it (default: current directory).",
)
