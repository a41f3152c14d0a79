# ABOUTME: The `bookledger inspect` command for viewing a saved collection.
# ABOUTME: Decodes a JSON array written by `bookledger import -o` and shows every book.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from bookledger.cli.display import books_table
from bookledger.metadata.codec import SchemaError, decode_annotated_books

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Show the books in a saved bookledger JSON file."""
    try:
        books = decode_annotated_books(path.read_bytes())
    except SchemaError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise SystemExit(1) from exc

    if not books:
        console.print("[yellow]No books in file.[/yellow]")
        return

    console.print(books_table(books, detailed=True))
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")
