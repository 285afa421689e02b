# ABOUTME: The `shelfie resolve` command: fetch and store metadata for an inventory item.
# ABOUTME: Serves the stored record unless --refresh forces a new lookup.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from shelfie.cli import services
from shelfie.cli.options import db_option
from shelfie.cli.render import print_record
from shelfie.config import Settings
from shelfie.db.store import MetadataStore
from shelfie.metadata.resolver import MetadataStorageError


@click.command("resolve")
@click.argument("item_id", type=int)
@click.option(
    "--refresh",
    is_flag=True,
    default=False,
    help="Fetch again even if metadata is already stored, replacing it.",
)
@db_option
def resolve(item_id: int, refresh: bool, db_path: Path | None) -> None:
    """Resolve and store catalog metadata for ITEM_ID."""
    console = Console()
    settings = Settings()
    conn = services.open_settings_store(settings, db_path)
    http_client = services.create_http_client(settings)
    try:
        store = MetadataStore(conn)
        item = store.get_item(item_id)
        if item is None:
            console.print(f"[red]Item {item_id} not found.[/red]")
            raise SystemExit(1)

        resolver = services.create_metadata_resolver(settings, http_client, store=store)
        try:
            record = resolver.resolve_and_store(
                item.id, item.name, item.type, item.barcode, force_refresh=refresh
            )
        except MetadataStorageError as exc:
            console.print(f"[red]Could not save metadata:[/red] {escape(str(exc))}")
            if exc.record is not None:
                print_record(console, exc.record)
            raise SystemExit(1) from exc
    finally:
        http_client.close()
        conn.close()

    if record is None:
        console.print("[yellow]Metadata unavailable.[/yellow]")
        return
    print_record(console, record)
