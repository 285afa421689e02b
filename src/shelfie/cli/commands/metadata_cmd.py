# ABOUTME: The `shelfie metadata` command: preview catalog metadata for a name and type.
# ABOUTME: Nothing is stored; "not found" is a normal outcome, not an error.

import click
from rich.console import Console

from shelfie.barcode.query import normalize_barcode
from shelfie.cli import services
from shelfie.cli.options import barcode_option, type_option
from shelfie.cli.render import print_record
from shelfie.config import Settings


@click.command("metadata")
@click.argument("name")
@type_option
@barcode_option
def metadata(name: str, type_: str, barcode: str | None) -> None:
    """Look up catalog metadata for NAME without storing it."""
    console = Console()
    settings = Settings()
    http_client = services.create_http_client(settings)
    try:
        resolver = services.create_metadata_resolver(settings, http_client)
        record = resolver.preview(name, type_, normalize_barcode(barcode) or None)
    finally:
        http_client.close()

    if record is None:
        console.print("[yellow]Metadata unavailable.[/yellow]")
        return
    print_record(console, record)
