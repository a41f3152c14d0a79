# ABOUTME: The `bookledger search` command for looking up books on Google Books.
# ABOUTME: Shows canonical Books built from the search results.

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bookledger.cli.options import api_key_option
from bookledger.metadata.googlebooks import GoogleBooksProvider
from bookledger.metadata.googlebooks_parser import books_from_response
from bookledger.metadata.http import BookledgerHttpClient, FetchError, HttpClient

console = Console()


def _create_http_client() -> BookledgerHttpClient:
    return BookledgerHttpClient()


def _create_provider(http_client: HttpClient, api_key: str | None) -> GoogleBooksProvider:
    """Create the default search provider (Google Books)."""
    return GoogleBooksProvider(http_client, api_key=api_key)


@click.command("search")
@click.argument("term")
@api_key_option
def search(term: str, api_key: str | None) -> None:
    """Search Google Books by free text."""
    with _create_http_client() as http_client:
        provider = _create_provider(http_client, api_key)
        try:
            response = provider.search_response(term)
        except FetchError as exc:
            console.print(f"[red]Error:[/red] {escape(str(exc))}")
            raise SystemExit(1) from exc

    books = books_from_response(response)
    if not books:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("ISBN-13")

    for book in books:
        table.add_row(
            escape(book.title),
            escape(book.author) or "[dim]unknown[/dim]",
            str(book.year_published) if book.year_published else "?",
            book.isbn13 or "[dim]none[/dim]",
        )

    console.print(table)
    console.print(f"\n[dim]{len(books)} of {response.total_items} result(s)[/dim]")
