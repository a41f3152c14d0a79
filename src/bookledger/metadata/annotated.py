# ABOUTME: AnnotatedBook layers personal fields (review, rating, history) over a Book.
# ABOUTME: Book fields are forwarded through explicit properties, not attribute magic.

import copy
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from bookledger.metadata.reading import ReadingHistory
from bookledger.metadata.types import Book


def _book_field(name: str) -> property:
    """Build a read/write property that forwards to ``self.book.<name>``."""

    def getter(self: "AnnotatedBook") -> Any:
        return getattr(self.book, name)

    def setter(self: "AnnotatedBook", value: Any) -> None:
        setattr(self.book, name, value)

    return property(getter, setter, doc=f"Forwarded to ``book.{name}``.")


@dataclass
class AnnotatedBook:
    """A Book plus one person's relationship to it.

    An encoded AnnotatedBook can be decoded as a plain Book (the personal
    fields are dropped), and an encoded Book can be decoded as an
    AnnotatedBook with every personal field absent. See ``codec``.
    """

    book: Book
    review: str | None = None
    rating: int | None = None
    date_added: datetime | None = None
    reading_history: ReadingHistory | None = None

    title = _book_field("title")
    authors = _book_field("authors")
    year_published = _book_field("year_published")
    original_year_published = _book_field("original_year_published")
    publisher = _book_field("publisher")
    isbn = _book_field("isbn")
    isbn13 = _book_field("isbn13")
    number_of_pages = _book_field("number_of_pages")
    tags = _book_field("tags")

    @classmethod
    def create(
        cls, title: str, authors: list[str] | None = None, **annotations: Any
    ) -> "AnnotatedBook":
        """Shortcut for wrapping a fresh Book with just a title and authors."""
        return cls(book=Book(title=title, authors=list(authors or [])), **annotations)

    @property
    def author(self) -> str:
        return self.book.author

    @property
    def has_annotations(self) -> bool:
        """Whether any personal field is set."""
        return any(
            value is not None
            for value in (self.review, self.rating, self.date_added, self.reading_history)
        )

    def ensure_reading_history(self) -> ReadingHistory:
        if self.reading_history is None:
            self.reading_history = ReadingHistory()
        return self.reading_history

    def copy(self) -> "AnnotatedBook":
        """Deep copy, including the whole reading history."""
        return copy.deepcopy(self)
