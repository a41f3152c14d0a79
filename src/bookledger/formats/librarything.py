# ABOUTME: LibraryThing JSON export support: best-effort decoding of each book object.
# ABOUTME: Only the title is required; irregular optional fields degrade to absent.

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bookledger.metadata.annotated import AnnotatedBook
from bookledger.metadata.codec import SchemaError, SkipHandler
from bookledger.metadata.dates import PartialDate
from bookledger.metadata.normalizer import (
    LIBRARYTHING_RATING_SCALE,
    clean_isbn,
    clean_text,
    genre_tags,
    parse_lenient_int,
    parse_positive_int,
    parse_rating,
    reshape_author_name,
)
from bookledger.metadata.types import Book

logger = logging.getLogger(__name__)

# LibraryThing keys its isbn object by code: "0" is the ISBN-10, "2" the ISBN-13.
ISBN10_CODE = "0"
ISBN13_CODE = "2"


class LibraryThingReadError(Exception):
    """Raised when a LibraryThing export file cannot be read or decoded."""


@dataclass
class LibraryThingAuthor:
    lf: str | None = None  # "Last, First"
    fl: str | None = None  # "First Last"

    @property
    def display_name(self) -> str | None:
        """The "First Last" form, reshaped from "Last, First" when needed."""
        if self.fl and self.fl.strip():
            return self.fl.strip()
        if self.lf and self.lf.strip():
            return reshape_author_name(self.lf)
        return None


def _parse_authors(raw: Any) -> list[LibraryThingAuthor]:
    # LibraryThing writes "no authors" as [[]] rather than []
    if not isinstance(raw, list):
        return []
    authors = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        lf = entry.get("lf")
        fl = entry.get("fl")
        authors.append(
            LibraryThingAuthor(
                lf=lf if isinstance(lf, str) else None,
                fl=fl if isinstance(fl, str) else None,
            )
        )
    return authors


def _parse_entrydate(raw: Any) -> PartialDate | None:
    if isinstance(raw, str):
        return PartialDate.parse(raw)
    if isinstance(raw, dict):
        return PartialDate.from_dict(raw)
    return None


def _parse_isbn_codes(raw: Any) -> dict[str, str] | None:
    if not isinstance(raw, dict):
        return None
    return {str(code): value for code, value in raw.items() if isinstance(value, str)}


@dataclass
class LibraryThingBook:
    """One book object from a LibraryThing JSON export."""

    title: str
    authors: list[LibraryThingAuthor] = field(default_factory=list)
    date: int | None = None
    review: str | None = None
    rating: int | None = None
    isbn: dict[str, str] | None = None
    entrydate: PartialDate | None = None
    genre: list[str] | None = None
    pages: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> "LibraryThingBook":
        """Decode one export object.

        Raises:
            SchemaError: If the object has no usable title.
        """
        if not isinstance(data, dict):
            raise SchemaError(f"expected a JSON object, got {type(data).__name__}")
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise SchemaError(f"missing or invalid title: {title!r}")

        review = data.get("review")
        genre = data.get("genre")
        return cls(
            title=title,
            authors=_parse_authors(data.get("authors")),
            date=parse_lenient_int(data.get("date")),
            review=review if isinstance(review, str) else None,
            rating=parse_lenient_int(data.get("rating")),
            isbn=_parse_isbn_codes(data.get("isbn")),
            entrydate=_parse_entrydate(data.get("entrydate")),
            genre=[g for g in genre if isinstance(g, str)] if isinstance(genre, list) else None,
            pages=parse_positive_int(data.get("pages")),
        )

    def to_book(self) -> Book:
        isbn = self.isbn or {}
        return Book(
            title=self.title,
            authors=[name for name in (a.display_name for a in self.authors) if name],
            year_published=self.date,
            original_year_published=None,
            publisher=None,
            isbn=clean_isbn(isbn.get(ISBN10_CODE)),
            isbn13=clean_isbn(isbn.get(ISBN13_CODE)),
            number_of_pages=self.pages,
            tags=genre_tags(self.genre or []),
        )

    def to_annotated_book(self) -> AnnotatedBook:
        return AnnotatedBook(
            book=self.to_book(),
            review=clean_text(self.review),
            rating=parse_rating(self.rating, LIBRARYTHING_RATING_SCALE),
            date_added=self.entrydate.to_datetime() if self.entrydate else None,
        )


def annotated_book_from_librarything(data: Any) -> AnnotatedBook:
    """Decode one export object straight to an AnnotatedBook.

    Raises:
        SchemaError: If the object has no usable title.
    """
    return LibraryThingBook.from_json(data).to_annotated_book()


def export_records(data: Any) -> list[tuple[str, Any]]:
    """List ``(key, record)`` pairs from an export.

    Exports are an object keyed by LibraryThing book id; a plain array of
    book objects is accepted too.
    """
    if isinstance(data, dict):
        return [(str(key), value) for key, value in data.items()]
    if isinstance(data, list):
        return [(str(index), value) for index, value in enumerate(data)]
    raise SchemaError(f"expected a JSON object or array, got {type(data).__name__}")


def _log_skip(record: str, reason: str) -> None:
    logger.warning("Skipping LibraryThing record %s: %s", record, reason)


def parse_librarything_export(
    data: Any, on_skip: SkipHandler | None = None
) -> list[AnnotatedBook]:
    """Convert every record of an export in order.

    Records that fail to decode are reported to ``on_skip`` (default: a
    warning log) under their export key and skipped.

    Raises:
        SchemaError: If the top level is neither an object nor an array.
    """
    report = on_skip or _log_skip
    books = []
    for key, record in export_records(data):
        try:
            books.append(annotated_book_from_librarything(record))
        except SchemaError as exc:
            report(key, str(exc))
    return books


def read_librarything_json(path: Path) -> Any:
    """Load a LibraryThing JSON export from disk.

    Raises:
        LibraryThingReadError: If the file cannot be read or is not JSON.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LibraryThingReadError(f"Cannot read {path}: {exc}") from exc
    logger.info("Read LibraryThing export from %s", path)
    return data
