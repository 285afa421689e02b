# ABOUTME: The `shelfie item` commands for registering and showing inventory items.
# ABOUTME: Items are what resolved metadata gets attached to.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from shelfie.barcode.query import normalize_barcode
from shelfie.cli.options import barcode_option, db_option, type_option
from shelfie.cli.render import print_record
from shelfie.cli.services import open_settings_store
from shelfie.config import Settings
from shelfie.db.store import MetadataStore
from shelfie.metadata.types import SourceType


@click.group("item")
def item() -> None:
    """Manage inventory items."""


@item.command("add")
@click.argument("name")
@type_option
@barcode_option
@db_option
def add(name: str, type_: str, barcode: str | None, db_path: Path | None) -> None:
    """Add an item and print its ID."""
    console = Console()
    conn = open_settings_store(Settings(), db_path)
    try:
        item_id = MetadataStore(conn).add_item(
            name, SourceType(type_), normalize_barcode(barcode) or None
        )
    finally:
        conn.close()
    console.print(f"[green]Added item {item_id}[/green]: {escape(name)} ({type_})")


@item.command("show")
@click.argument("item_id", type=int)
@db_option
def show(item_id: int, db_path: Path | None) -> None:
    """Show an item and its stored metadata."""
    console = Console()
    conn = open_settings_store(Settings(), db_path)
    try:
        store = MetadataStore(conn)
        record = store.get_item(item_id)
        if record is None:
            console.print(f"[red]Item {item_id} not found.[/red]")
            raise SystemExit(1)
        metadata = store.get_for_item(item_id)
    finally:
        conn.close()

    console.print(f"[bold]{escape(record.name)}[/bold] [dim]({record.type.value})[/dim]")
    if record.barcode:
        console.print(f"[dim]Barcode {escape(record.barcode)}[/dim]")
    if metadata is None:
        console.print("[yellow]No metadata yet.[/yellow]")
        return
    print_record(console, metadata)
