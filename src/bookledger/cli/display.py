# ABOUTME: Rich rendering helpers shared by the CLI commands.
# ABOUTME: Builds book tables showing canonical fields plus personal annotations.

from rich.markup import escape
from rich.table import Table

from bookledger.metadata.annotated import AnnotatedBook
from bookledger.metadata.reading import ReadingState

_STATE_LABELS = {
    ReadingState.NEVER_READ: "[dim]unread[/dim]",
    ReadingState.CURRENTLY_READING: "[cyan]reading[/cyan]",
    ReadingState.FINISHED_AT_LEAST_ONCE: "[green]read[/green]",
    ReadingState.FINISHED_MULTIPLE_TIMES: "[green]read (multiple)[/green]",
}


def reading_label(book: AnnotatedBook) -> str:
    if book.reading_history is None:
        return _STATE_LABELS[ReadingState.NEVER_READ]
    return _STATE_LABELS[book.reading_history.state]


def rating_label(book: AnnotatedBook) -> str:
    return "*" * book.rating if book.rating else "[dim]-[/dim]"


def books_table(books: list[AnnotatedBook], *, detailed: bool = False) -> Table:
    """Table of books; ``detailed`` adds ISBN, pages and reading sessions."""
    table = Table()
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Rating")
    table.add_column("Status")
    if detailed:
        table.add_column("ISBN")
        table.add_column("Pages")
        table.add_column("Sessions")

    for index, book in enumerate(books, start=1):
        row = [
            str(index),
            escape(book.title),
            escape(book.author) or "[dim]unknown[/dim]",
            rating_label(book),
            reading_label(book),
        ]
        if detailed:
            history = book.reading_history
            sessions = [
                f"{entry.start or '?'} - {entry.finish if entry.finish is not None else 'now'}"
                for entry in (history.entries or [] if history else [])
            ]
            row.extend(
                [
                    book.isbn13 or book.isbn or "[dim]none[/dim]",
                    str(book.number_of_pages) if book.number_of_pages else "?",
                    "\n".join(sessions) or "[dim]none[/dim]",
                ]
            )
        table.add_row(*row)
    return table
