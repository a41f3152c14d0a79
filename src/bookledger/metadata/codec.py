# ABOUTME: Flat JSON encoding for Book and AnnotatedBook.
# ABOUTME: Annotation keys sit beside the Book keys so either type decodes the other's payload.

import json
import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from bookledger.metadata.annotated import AnnotatedBook
from bookledger.metadata.reading import ReadingHistory
from bookledger.metadata.types import Book

logger = logging.getLogger(__name__)


class SchemaError(Exception):
    """Raised when a payload lacks a required field such as the title."""


# Called with a record label (e.g. "row 3") and the reason a record was skipped.
SkipHandler = Callable[[str, str], None]


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        if value is not None:
            logger.debug("Ignoring non-integer %s: %r", key, value)
        return None
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        if value is not None:
            logger.debug("Ignoring non-string %s: %r", key, value)
        return None
    return value


def _string_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def book_to_dict(book: Book) -> dict[str, Any]:
    """Serialize a Book to a flat dict, omitting absent fields."""
    result: dict[str, Any] = {"title": book.title, "authors": list(book.authors)}
    optional = {
        "yearPublished": book.year_published,
        "originalYearPublished": book.original_year_published,
        "publisher": book.publisher,
        "isbn": book.isbn,
        "isbn13": book.isbn13,
        "numberOfPages": book.number_of_pages,
        "tags": list(book.tags) if book.tags is not None else None,
    }
    result.update({key: value for key, value in optional.items() if value is not None})
    return result


def annotated_book_to_dict(annotated: AnnotatedBook) -> dict[str, Any]:
    """Serialize an AnnotatedBook: the Book keys plus sibling annotation keys."""
    result = book_to_dict(annotated.book)
    if annotated.review is not None:
        result["review"] = annotated.review
    if annotated.rating is not None:
        result["rating"] = annotated.rating
    if annotated.date_added is not None:
        result["dateAdded"] = annotated.date_added.isoformat()
    if annotated.reading_history is not None:
        result["readingHistory"] = annotated.reading_history.to_dict()
    return result


def book_from_dict(data: Any) -> Book:
    """Decode the Book fields of a payload, ignoring anything else.

    Only the title is required. Every other field is decoded best-effort:
    a missing or wrong-typed value becomes absent.

    Raises:
        SchemaError: If the payload is not an object or has no usable title.
    """
    if not isinstance(data, dict):
        raise SchemaError(f"expected a JSON object, got {type(data).__name__}")
    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise SchemaError(f"missing or invalid title: {title!r}")

    return Book(
        title=title,
        authors=_string_list(data.get("authors")) or [],
        year_published=_optional_int(data, "yearPublished"),
        original_year_published=_optional_int(data, "originalYearPublished"),
        publisher=_optional_str(data, "publisher"),
        isbn=_optional_str(data, "isbn"),
        isbn13=_optional_str(data, "isbn13"),
        number_of_pages=_optional_int(data, "numberOfPages"),
        tags=_string_list(data.get("tags")),
    )


def _date_added(data: dict[str, Any]) -> datetime | None:
    value = data.get("dateAdded")
    if not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug("Ignoring unparseable dateAdded: %r", value)
        return None


def annotated_book_from_dict(data: Any) -> AnnotatedBook:
    """Decode an AnnotatedBook; each annotation field is independently optional.

    A bare Book payload decodes with every annotation absent.

    Raises:
        SchemaError: Under the same conditions as ``book_from_dict``.
    """
    book = book_from_dict(data)
    history = data.get("readingHistory")
    return AnnotatedBook(
        book=book,
        review=_optional_str(data, "review"),
        rating=_optional_int(data, "rating"),
        date_added=_date_added(data),
        reading_history=ReadingHistory.from_dict(history) if isinstance(history, dict) else None,
    )


def _loads(payload: bytes | str) -> Any:
    try:
        return json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SchemaError(f"payload is not valid JSON: {exc}") from exc


def encode_book(book: Book) -> bytes:
    return json.dumps(book_to_dict(book), ensure_ascii=False).encode("utf-8")


def decode_book(payload: bytes | str) -> Book:
    return book_from_dict(_loads(payload))


def encode_annotated_book(annotated: AnnotatedBook) -> bytes:
    return json.dumps(annotated_book_to_dict(annotated), ensure_ascii=False).encode("utf-8")


def decode_annotated_book(payload: bytes | str) -> AnnotatedBook:
    return annotated_book_from_dict(_loads(payload))


def encode_annotated_books(books: Iterable[AnnotatedBook]) -> bytes:
    """Encode a collection as a pretty-printed JSON array."""
    items = [annotated_book_to_dict(book) for book in books]
    return json.dumps(items, ensure_ascii=False, indent=2).encode("utf-8")


def decode_annotated_books(payload: bytes | str) -> list[AnnotatedBook]:
    """Decode a JSON array written by ``encode_annotated_books``.

    Raises:
        SchemaError: If the payload is not an array, or an element is invalid.
    """
    data = _loads(payload)
    if not isinstance(data, list):
        raise SchemaError(f"expected a JSON array, got {type(data).__name__}")
    books = []
    for index, item in enumerate(data):
        try:
            books.append(annotated_book_from_dict(item))
        except SchemaError as exc:
            raise SchemaError(f"item {index}: {exc}") from exc
    return books
