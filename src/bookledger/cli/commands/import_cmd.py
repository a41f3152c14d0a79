# ABOUTME: The `bookledger import` command for converting a collection export.
# ABOUTME: Reads a Goodreads CSV or LibraryThing JSON file and shows or saves the books.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookledger.cli.display import books_table
from bookledger.cli.options import output_option
from bookledger.core.importer import ImportSource, import_collection
from bookledger.formats.goodreads import GoodreadsReadError, MissingColumnError
from bookledger.formats.librarything import LibraryThingReadError
from bookledger.metadata.codec import SchemaError, encode_annotated_books

console = Console()


@click.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--source",
    type=click.Choice([source.value for source in ImportSource]),
    default=None,
    help="Export type (default: detected from the file suffix).",
)
@output_option
def import_books(path: Path, source: str | None, output_path: Path | None) -> None:
    """Import books from a Goodreads or LibraryThing export."""
    try:
        result = import_collection(path, ImportSource(source) if source else None)
    except (
        ValueError,
        MissingColumnError,
        GoodreadsReadError,
        LibraryThingReadError,
        SchemaError,
    ) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    if result.books:
        console.print(books_table(result.books))
    console.print(
        f"\n[bold]{len(result.books)}[/bold] book(s) imported from {result.source.value}"
    )

    if result.skipped:
        console.print(f"[yellow]{result.skipped} record(s) skipped:[/yellow]")
        for record, reason in result.error_details:
            console.print(f"  [dim]{escape(record)}:[/dim] {escape(reason)}")

    if output_path is not None:
        output_path.write_bytes(encode_annotated_books(result.books))
        console.print(f"[green]Wrote[/green] {output_path}")
