# ABOUTME: Shared Click options for shelfie CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db and --type.

from pathlib import Path

import click

from shelfie.config import DEFAULT_DB_PATH
from shelfie.metadata.types import SourceType

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to inventory database (default: $SHELFIE_DB or {DEFAULT_DB_PATH})",
)

type_option = click.option(
    "-t",
    "--type",
    "type_",
    type=click.Choice([t.value for t in SourceType]),
    required=True,
    help="Content type, which selects the catalog to query.",
)

barcode_option = click.option(
    "-b",
    "--barcode",
    default=None,
    help="Barcode (ISBN, UPC, EAN) used for exact identifier matches.",
)
