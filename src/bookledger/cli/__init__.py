# ABOUTME: CLI package for bookledger, built on Click.
# ABOUTME: Defines the root command group, logging flags, and registers subcommands.

from pathlib import Path

import click

from bookledger.cli.commands import cover_cmd, import_cmd, inspect_cmd, search_cmd
from bookledger.logging_setup import setup_logging, verbosity_to_level


@click.group()
@click.version_option(package_name="bookledger")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write debug logs to this file.",
)
def cli(verbose: int, log_file: Path | None) -> None:
    """bookledger - reconcile book collection exports into one format."""
    setup_logging(verbosity_to_level(verbose), log_file)


cli.add_command(import_cmd.import_books)
cli.add_command(inspect_cmd.inspect)
cli.add_command(search_cmd.search)
cli.add_command(cover_cmd.cover)
