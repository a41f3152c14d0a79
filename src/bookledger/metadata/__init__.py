# ABOUTME: Metadata package: the canonical book model, reading history, and codecs.
# ABOUTME: Exports the types every import source converts into.

from bookledger.metadata.annotated import AnnotatedBook
from bookledger.metadata.codec import (
    SchemaError,
    decode_annotated_book,
    decode_book,
    encode_annotated_book,
    encode_book,
)
from bookledger.metadata.dates import PartialDate
from bookledger.metadata.provider import BookSearchProvider
from bookledger.metadata.reading import ReadingEntry, ReadingHistory, ReadingState
from bookledger.metadata.types import Book

__all__ = [
    "AnnotatedBook",
    "Book",
    "BookSearchProvider",
    "PartialDate",
    "ReadingEntry",
    "ReadingHistory",
    "ReadingState",
    "SchemaError",
    "decode_annotated_book",
    "decode_book",
    "encode_annotated_book",
    "encode_book",
]
