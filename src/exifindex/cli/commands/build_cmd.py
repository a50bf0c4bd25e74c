# ABOUTME: The `exifindex build` command that writes the gallery index.
# ABOUTME: Scans the image directory, resolves metadata, and writes data/images.json.

from pathlib import Path

import click
from rich.console import Console

from exifindex.cli.options import root_option
from exifindex.core.config import DEFAULT_IMAGES_DIR, DEFAULT_OUTPUT_PATH, IndexConfig
from exifindex.core.index import run
from exifindex.errors import ExifIndexError
from exifindex.formats.image import DEFAULT_DECODE_TIMEOUT

err_console = Console(stderr=True)


@click.command()
@root_option
@click.option(
    "--images",
    "images_dir",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Image directory, relative to the root (default: {DEFAULT_IMAGES_DIR}).",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Index file, relative to the root (default: {DEFAULT_OUTPUT_PATH}).",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_DECODE_TIMEOUT,
    show_default=True,
    help="Seconds to wait for one file's metadata before skipping it.",
)
def build(root: Path, images_dir: Path | None, output_path: Path | None, timeout: float) -> None:
    """Build the gallery index from image metadata."""
    config = IndexConfig.for_root(
        root, images_dir=images_dir, output_path=output_path, decode_timeout=timeout
    )

    try:
        result = run(config)
    except ExifIndexError as exc:
        err_console.print(f"[red]Error:[/red] {exc}", soft_wrap=True)
        raise SystemExit(1) from exc

    click.echo(f"Wrote {result.output_path}")
    summary = f"{result.total} image(s) indexed"
    if result.degraded:
        summary += f", {result.degraded} with minimal metadata"
    click.echo(summary)
