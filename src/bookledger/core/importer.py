# ABOUTME: Import pipeline turning a Goodreads or LibraryThing export into AnnotatedBooks.
# ABOUTME: A bad record only costs that record; a missing required column fails the file.

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from bookledger.formats.goodreads import parse_goodreads_table, read_goodreads_csv
from bookledger.formats.librarything import parse_librarything_export, read_librarything_json
from bookledger.metadata.annotated import AnnotatedBook

logger = logging.getLogger(__name__)


class ImportSource(str, Enum):
    GOODREADS = "goodreads"
    LIBRARYTHING = "librarything"


_SUFFIX_SOURCES = {
    ".csv": ImportSource.GOODREADS,
    ".json": ImportSource.LIBRARYTHING,
}


@dataclass
class ImportResult:
    """Summary of an import: the books produced and the records skipped."""

    source: ImportSource
    books: list[AnnotatedBook] = field(default_factory=list)
    skipped: int = 0
    error_details: list[tuple[str, str]] = field(default_factory=list)

    def skip(self, record: str, reason: str) -> None:
        self.skipped += 1
        self.error_details.append((record, reason))
        logger.warning("Skipped %s record %s: %s", self.source.value, record, reason)


def detect_source(path: Path) -> ImportSource:
    """Guess the export type from the file suffix.

    Raises:
        ValueError: If the suffix is not recognized.
    """
    try:
        return _SUFFIX_SOURCES[path.suffix.lower()]
    except KeyError:
        raise ValueError(f"Cannot tell the export type of {path.name}; pass a source") from None


def import_goodreads(path: Path) -> ImportResult:
    """Import a Goodreads CSV export.

    Raises:
        GoodreadsReadError: If the file cannot be read.
        MissingColumnError: If the title or author column is missing.
    """
    table = read_goodreads_csv(path)
    result = ImportResult(source=ImportSource.GOODREADS)
    result.books = parse_goodreads_table(table, on_skip=result.skip)
    return result


def import_librarything(path: Path) -> ImportResult:
    """Import a LibraryThing JSON export.

    Raises:
        LibraryThingReadError: If the file cannot be read.
        SchemaError: If the top level is neither an object nor an array.
    """
    data = read_librarything_json(path)
    result = ImportResult(source=ImportSource.LIBRARYTHING)
    result.books = parse_librarything_export(data, on_skip=result.skip)
    return result


def import_collection(path: Path, source: ImportSource | None = None) -> ImportResult:
    """Import an export file, detecting its type from the suffix if not given."""
    source = source or detect_source(path)
    if source is ImportSource.GOODREADS:
        return import_goodreads(path)
    return import_librarything(path)
