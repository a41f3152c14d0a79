# ABOUTME: Shared Click options for bookledger CLI commands.
# ABOUTME: Provides reusable decorators for the API key and JSON output flags.

from pathlib import Path

import click

API_KEY_ENVVAR = "GOOGLE_BOOKS_API_KEY"

api_key_option = click.option(
    "--api-key",
    envvar=API_KEY_ENVVAR,
    default=None,
    help=f"Google Books API key (default: ${API_KEY_ENVVAR}).",
)

output_option = click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the imported books to this file as a JSON array.",
)
