# ABOUTME: Rich rendering of metadata records and barcode lookups for the CLI.
# ABOUTME: Only fields that are present are shown; upstream text is escaped, never parsed as markup.

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shelfie.barcode.types import BarcodeLookup
from shelfie.metadata.types import MetadataRecord


def _format_duration(seconds: int) -> str:
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}" if hours else f"{minutes}:{secs:02d}"


def print_record(console: Console, record: MetadataRecord) -> None:
    """Print a metadata record as a two-column field table, then its attachments."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Title", escape(record.title) if record.title else "[dim]unknown[/dim]")
    if record.authors:
        table.add_row("Authors", escape(record.author))
    if record.publishers:
        table.add_row("Publishers", escape(", ".join(p.name for p in record.publishers)))
    if record.release_date:
        table.add_row("Released", escape(record.release_date))
    if record.duration:
        table.add_row("Duration", _format_duration(record.duration))
    if record.page_count:
        table.add_row("Pages", str(record.page_count))
    if record.track_count:
        table.add_row("Tracks", str(record.track_count))
    if record.image_url:
        table.add_row("Cover", escape(record.image_url))
    if record.description:
        table.add_row("Description", escape(record.description))
    if record.source_type:
        source = f"{record.source_type.value} ({record.source_query})"
        table.add_row("Source", escape(source))
    if record.last_fetched:
        table.add_row("Fetched", record.last_fetched.isoformat(sep=" "))
    console.print(table)

    if record.attachments:
        attachments = Table(title="Attachments")
        attachments.add_column("Kind", width=6)
        attachments.add_column("Title")
        attachments.add_column("Length", width=8)
        attachments.add_column("URL", style="dim")
        for attachment in record.attachments:
            attachments.add_row(
                attachment.kind.value,
                escape(attachment.title or ""),
                _format_duration(attachment.duration) if attachment.duration else "",
                escape(attachment.url),
            )
        console.print(attachments)


def print_lookup(console: Console, lookup: BarcodeLookup) -> None:
    """Print a barcode lookup: the clean name, then the raw titles it came from."""
    if lookup.clean_name:
        console.print(f"[bold]{escape(lookup.clean_name)}[/bold]")
    else:
        console.print("[dim](empty name)[/dim]")
    console.print(f"[dim]Barcode {lookup.barcode} via {escape(lookup.provider)}[/dim]")
    for name in lookup.raw_names:
        console.print(f"  [dim]-[/dim] {escape(name)}")
