# ABOUTME: The `exifindex inspect` command for viewing one image's resolved record.
# ABOUTME: Shows the title, artist, collection, and creation date the index would contain.

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from exifindex.cli.options import root_option
from exifindex.core.index import build_record
from exifindex.formats.image import MetadataReader

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@root_option
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output the record as JSON.",
)
def inspect(path: Path, root: Path, json_output: bool) -> None:
    """Show the index record resolved for a single image."""
    record = build_record(path.resolve(), MetadataReader(), root.resolve())

    if json_output:
        click.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
        return

    table = Table(title=record.filename, show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Path", record.path)
    table.add_row("Title", record.title or "[dim]none[/dim]")
    table.add_row("Artist", record.artist or "[dim]unknown[/dim]")
    table.add_row("Collection", record.collection or "[dim]none[/dim]")
    table.add_row("Created", record.creation_date)

    console.print(table)
