# ABOUTME: The `shelfie barcode` command: resolve a barcode to a clean product name.
# ABOUTME: Walks the search provider chain once; later lookups come from the cache.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from shelfie.barcode.query import normalize_barcode
from shelfie.barcode.resolver import BarcodeCacheError, to_lookup
from shelfie.cli import services
from shelfie.cli.options import db_option
from shelfie.cli.render import print_lookup
from shelfie.config import Settings


@click.command("barcode")
@click.argument("code")
@db_option
def barcode(code: str, db_path: Path | None) -> None:
    """Resolve barcode CODE to a product name."""
    console = Console()
    if not normalize_barcode(code):
        raise click.BadParameter("barcode must contain digits", param_hint="CODE")

    settings = Settings()
    conn = services.open_settings_store(settings, db_path)
    http_client = services.create_http_client(settings)
    try:
        resolver = services.create_barcode_resolver(settings, http_client, conn)
        lookup = resolver.resolve_name(code)
    except BarcodeCacheError as exc:
        console.print(f"[red]Barcode cache error:[/red] {escape(str(exc))}")
        if exc.entry is not None:
            print_lookup(console, to_lookup(exc.entry))
        raise SystemExit(1) from exc
    finally:
        http_client.close()
        conn.close()

    if lookup is None:
        console.print(f"[yellow]Barcode {normalize_barcode(code)} not recognized.[/yellow]")
        raise SystemExit(2)
    print_lookup(console, lookup)
