# ABOUTME: The `bookledger cover` command for downloading cover art by ISBN.
# ABOUTME: Fetches from the Open Library covers host and saves the image to disk.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookledger.metadata.covers import COVER_SIZES, fetch_cover
from bookledger.metadata.http import BookledgerHttpClient, FetchError
from bookledger.metadata.normalizer import clean_isbn

console = Console()


def _create_http_client() -> BookledgerHttpClient:
    return BookledgerHttpClient()


@click.command()
@click.argument("isbn")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Where to save the image (default: <isbn>.<ext> in the current directory).",
)
@click.option(
    "--size",
    type=click.Choice(COVER_SIZES, case_sensitive=False),
    default="M",
    show_default=True,
)
def cover(isbn: str, output_path: Path | None, size: str) -> None:
    """Download the cover image for ISBN."""
    clean = clean_isbn(isbn)
    if clean is None:
        console.print(f"[red]Error:[/red] not an ISBN: {escape(isbn)}")
        raise SystemExit(1)

    with _create_http_client() as http_client:
        try:
            image = fetch_cover(http_client, clean, size.upper())
        except FetchError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc

    target = output_path or Path(f"{clean}{image.extension}")
    target.write_bytes(image.data)
    console.print(f"[green]Saved[/green] {target} ({len(image.data)} bytes)")
