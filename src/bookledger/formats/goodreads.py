# ABOUTME: Goodreads CSV export support: header matching and row-to-AnnotatedBook conversion.
# ABOUTME: Messy optional cells degrade to absent; only a missing title or author column is fatal.

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from bookledger.metadata.annotated import AnnotatedBook
from bookledger.metadata.codec import SchemaError, SkipHandler
from bookledger.metadata.dates import PartialDate
from bookledger.metadata.normalizer import (
    GOODREADS_RATING_SCALE,
    clean_isbn,
    clean_text,
    parse_lenient_int,
    parse_positive_int,
    parse_rating,
    unwrap_protected_text,
)
from bookledger.metadata.reading import ReadingHistory
from bookledger.metadata.types import Book

logger = logging.getLogger(__name__)

DATE_ADDED_FORMAT = "%Y/%m/%d"

# Shelves Goodreads uses for reading status rather than for grouping.
EXCLUSIVE_SHELVES = frozenset({"read", "currently-reading", "to-read"})


class GoodreadsReadError(Exception):
    """Raised when a Goodreads export file cannot be read or decoded."""


class MissingColumnError(Exception):
    """Raised when an export lacks the title or author column."""


class GoodreadsColumn(str, Enum):
    """Logical columns and the header text Goodreads uses for them."""

    TITLE = "title"
    AUTHOR = "author"
    ISBN = "isbn"
    ISBN13 = "isbn13"
    RATING = "My Rating"
    PUBLISHER = "publisher"
    NUMBER_OF_PAGES = "Number of Pages"
    YEAR_PUBLISHED = "Year Published"
    DATE_ADDED = "Date Added"
    REVIEW = "My review"
    ADDITIONAL_AUTHORS = "Additional Authors"
    ORIGINAL_PUBLICATION_YEAR = "Original Publication Year"
    BOOKSHELVES = "Bookshelves"
    EXCLUSIVE_SHELF = "Exclusive Shelf"
    DATE_READ = "Date Read"
    READ_COUNT = "Read Count"


REQUIRED_COLUMNS = (GoodreadsColumn.TITLE, GoodreadsColumn.AUTHOR)

# Maps each logical column to the actual header text found in a file.
ColumnMap = dict[GoodreadsColumn, str]


@dataclass
class DecodedTable:
    """A spreadsheet after CSV decoding: headers plus header -> cell mappings."""

    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)


def match_headers(headers: list[str]) -> ColumnMap:
    """Find the actual header for each expected column.

    Headers match when their trimmed text equals the expected text,
    ignoring case. When several headers match one column the last one wins.

    Raises:
        MissingColumnError: If no header matches title or author.
    """
    columns: ColumnMap = {}
    # TODO: reject duplicate matching headers once real exports confirm they never occur
    for column in GoodreadsColumn:
        for header in headers:
            if header.strip().casefold() == column.value.casefold():
                columns[column] = header

    missing = [column.value for column in REQUIRED_COLUMNS if column not in columns]
    if missing:
        raise MissingColumnError(f"Missing required column(s): {', '.join(missing)}")
    return columns


def _cell(row: dict[str, str], columns: ColumnMap, column: GoodreadsColumn) -> str | None:
    """Raw cell text for a column with any ="..." protection removed."""
    header = columns.get(column)
    if header is None:
        return None
    value = row.get(header)
    if not isinstance(value, str):
        return None
    return unwrap_protected_text(value)


def _parse_date_added(value: str | None, now: datetime) -> datetime:
    if value:
        try:
            return datetime.strptime(value.strip(), DATE_ADDED_FORMAT)
        except ValueError:
            logger.debug("Unparseable Date Added %r, using current time", value)
    return now


def _parse_shelves(value: str | None) -> list[str] | None:
    if not value:
        return None
    shelves = []
    for shelf in value.split(","):
        shelf = shelf.strip()
        if shelf and shelf.lower() not in EXCLUSIVE_SHELVES and shelf not in shelves:
            shelves.append(shelf)
    return shelves or None


def _reading_history(row: dict[str, str], columns: ColumnMap) -> ReadingHistory | None:
    """Build a history from shelf, read date and read count, if they say anything."""
    shelf = (_cell(row, columns, GoodreadsColumn.EXCLUSIVE_SHELF) or "").strip().lower()
    date_read_text = clean_text(_cell(row, columns, GoodreadsColumn.DATE_READ))
    date_read = PartialDate.parse(date_read_text) if date_read_text else None
    read_count = parse_lenient_int(_cell(row, columns, GoodreadsColumn.READ_COUNT)) or 0

    if shelf not in ("read", "currently-reading") and date_read is None and read_count <= 0:
        return None

    history = ReadingHistory()
    if date_read is not None:
        history.finish_reading(date_read)
    elif shelf == "read" or read_count > 0:
        history.has_read = True
    if read_count > 1:
        history.multiple_readings = True
    if shelf == "currently-reading":
        history.start_reading()
    return history


def book_from_row(
    row: dict[str, str], columns: ColumnMap, now: datetime | None = None
) -> AnnotatedBook:
    """Convert one decoded row into an AnnotatedBook.

    Optional cells that fail to parse become absent; they never reject the row.
    An unparseable Date Added falls back to ``now`` (default: the current time).

    Raises:
        SchemaError: If the row's title is blank.
    """
    title = row.get(columns[GoodreadsColumn.TITLE]) or ""
    if not title.strip():
        raise SchemaError("row has no title")
    author = row.get(columns[GoodreadsColumn.AUTHOR]) or ""

    authors = [author] if author.strip() else []
    additional = _cell(row, columns, GoodreadsColumn.ADDITIONAL_AUTHORS)
    if additional:
        authors.extend(name.strip() for name in additional.split(",") if name.strip())

    book = Book(
        title=title,
        authors=authors,
        year_published=parse_lenient_int(_cell(row, columns, GoodreadsColumn.YEAR_PUBLISHED)),
        original_year_published=parse_lenient_int(
            _cell(row, columns, GoodreadsColumn.ORIGINAL_PUBLICATION_YEAR)
        ),
        publisher=clean_text(_cell(row, columns, GoodreadsColumn.PUBLISHER)),
        isbn=clean_isbn(_cell(row, columns, GoodreadsColumn.ISBN)),
        isbn13=clean_isbn(_cell(row, columns, GoodreadsColumn.ISBN13)),
        number_of_pages=parse_positive_int(_cell(row, columns, GoodreadsColumn.NUMBER_OF_PAGES)),
        tags=_parse_shelves(_cell(row, columns, GoodreadsColumn.BOOKSHELVES)),
    )
    return AnnotatedBook(
        book=book,
        review=clean_text(_cell(row, columns, GoodreadsColumn.REVIEW)),
        rating=parse_rating(_cell(row, columns, GoodreadsColumn.RATING), GOODREADS_RATING_SCALE),
        date_added=_parse_date_added(
            _cell(row, columns, GoodreadsColumn.DATE_ADDED), now or datetime.now()
        ),
        reading_history=_reading_history(row, columns),
    )


def _log_skip(record: str, reason: str) -> None:
    logger.warning("Skipping Goodreads %s: %s", record, reason)


def parse_goodreads_table(
    table: DecodedTable, on_skip: SkipHandler | None = None, now: datetime | None = None
) -> list[AnnotatedBook]:
    """Convert every row of a decoded export, in row order.

    Rows without a title are skipped and reported to ``on_skip`` (default: a
    warning log) as ``"row N"``, numbered like spreadsheet lines so the header
    is row 1. Every other row yields a book.

    Raises:
        MissingColumnError: If the title or author column is missing.
    """
    columns = match_headers(table.headers)
    report = on_skip or _log_skip
    now = now or datetime.now()
    books = []
    for line, row in enumerate(table.rows, start=2):
        try:
            books.append(book_from_row(row, columns, now=now))
        except SchemaError as exc:
            report(f"row {line}", str(exc))
    return books


def read_goodreads_csv(path: Path) -> DecodedTable:
    """Decode a Goodreads CSV export into headers and rows.

    Raises:
        GoodreadsReadError: If the file cannot be opened or decoded.
    """
    try:
        with open(path, encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            rows = [dict(row) for row in reader]
            headers = list(reader.fieldnames or [])
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise GoodreadsReadError(f"Cannot read {path}: {exc}") from exc

    logger.info("Read %d rows with headers %s from %s", len(rows), headers, path)
    return DecodedTable(headers=headers, rows=rows)
