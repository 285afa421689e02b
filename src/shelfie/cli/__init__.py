# ABOUTME: CLI package for shelfie, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from shelfie.cli.commands import barcode_cmd, item_cmd, metadata_cmd, resolve_cmd


@click.group()
@click.version_option(package_name="shelfie")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show lookup progress logs.")
def cli(verbose: bool) -> None:
    """shelfie - catalog metadata and barcode names for a shelf inventory."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(item_cmd.item)
cli.add_command(metadata_cmd.metadata)
cli.add_command(resolve_cmd.resolve)
cli.add_command(barcode_cmd.barcode)
