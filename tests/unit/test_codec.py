# ABOUTME: Unit tests for Book/AnnotatedBook JSON encoding and decoding.
# ABOUTME: Validates round-trips, cross-type compatibility, and lenient optional fields.

import json
from datetime import datetime

import pytest

from bookledger.metadata import (
    AnnotatedBook,
    Book,
    PartialDate,
    ReadingHistory,
    SchemaError,
    decode_annotated_book,
    decode_book,
    encode_annotated_book,
    encode_book,
)
from bookledger.metadata.codec import (
    annotated_book_to_dict,
    book_from_dict,
    decode_annotated_books,
    encode_annotated_books,
)


@pytest.fixture
def full_book() -> Book:
    return Book(
        title="The C Programming Language",
        authors=["Brian W. Kernighan", "Dennis M. Ritchie"],
        year_published=1988,
        original_year_published=1978,
        publisher="Prentice Hall",
        isbn="0131103628",
        isbn13="9780131103627",
        number_of_pages=272,
        tags=["programming", "#genre/computers"],
    )


@pytest.fixture
def annotated(full_book: Book) -> AnnotatedBook:
    history = ReadingHistory()
    history.start_reading(PartialDate(2021, 6, 28))
    history.finish_reading(PartialDate(2021, 7, 3))
    history.start_reading(PartialDate(year=2023))
    return AnnotatedBook(
        book=full_book,
        review="This is a test",
        rating=3,
        date_added=datetime(2021, 6, 20, 9, 30),
        reading_history=history,
    )


class TestRoundTrip:
    """Encoding then decoding returns an equal value."""

    def test_annotated_round_trip(self, annotated: AnnotatedBook) -> None:
        assert decode_annotated_book(encode_annotated_book(annotated)) == annotated

    def test_annotated_round_trip_restricted_to_book(self, annotated: AnnotatedBook) -> None:
        decoded = decode_annotated_book(encode_annotated_book(annotated))
        assert decoded.book == annotated.book

    def test_book_round_trip(self, full_book: Book) -> None:
        assert decode_book(encode_book(full_book)) == full_book

    def test_minimal_book_round_trip(self) -> None:
        book = Book(title="Dune")
        assert decode_book(encode_book(book)) == book


class TestCrossTypeCompatibility:
    """A Book payload and an AnnotatedBook payload decode as either type."""

    def test_annotated_payload_decodes_as_book(self, annotated: AnnotatedBook) -> None:
        assert decode_book(encode_annotated_book(annotated)) == annotated.book

    def test_book_payload_decodes_as_annotated(self, full_book: Book) -> None:
        decoded = decode_annotated_book(encode_book(full_book))
        assert decoded.book == full_book
        assert decoded.review is None
        assert decoded.rating is None
        assert decoded.date_added is None
        assert decoded.reading_history is None

    def test_annotation_keys_are_top_level(self, annotated: AnnotatedBook) -> None:
        payload = json.loads(encode_annotated_book(annotated))
        assert payload["title"] == "The C Programming Language"
        assert payload["isbn13"] == "9780131103627"
        assert payload["review"] == "This is a test"
        assert payload["rating"] == 3
        assert payload["dateAdded"] == "2021-06-20T09:30:00"
        assert payload["readingHistory"]["entries"][0]["finish"] == {
            "year": 2021,
            "month": 7,
            "day": 3,
        }
        assert "book" not in payload

    def test_unknown_keys_ignored(self) -> None:
        payload = b'{"title": "Dune", "authors": ["Frank Herbert"], "shelf": "sci-fi"}'
        decoded = decode_annotated_book(payload)
        assert decoded.book == Book(title="Dune", authors=["Frank Herbert"])


class TestLenientDecoding:
    """Only the title is required; other fields degrade to absent."""

    def test_missing_title_raises(self) -> None:
        with pytest.raises(SchemaError, match="title"):
            decode_book(b'{"authors": ["Nobody"]}')

    def test_wrong_typed_title_raises(self) -> None:
        with pytest.raises(SchemaError, match="title"):
            decode_annotated_book(b'{"title": 42}')

    def test_non_object_raises(self) -> None:
        with pytest.raises(SchemaError):
            decode_book(b'["Dune"]')

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(SchemaError, match="JSON"):
            decode_book(b"{not json")

    def test_missing_authors_becomes_empty(self) -> None:
        assert decode_book(b'{"title": "Beowulf"}').authors == []

    def test_wrong_typed_optional_fields_become_absent(self) -> None:
        payload = {
            "title": "Dune",
            "yearPublished": "1965",
            "numberOfPages": True,
            "publisher": 7,
            "rating": "five",
            "dateAdded": "yesterday",
            "readingHistory": "lots",
        }
        decoded = decode_annotated_book(json.dumps(payload))
        assert decoded.year_published is None
        assert decoded.number_of_pages is None
        assert decoded.publisher is None
        assert decoded.rating is None
        assert decoded.date_added is None
        assert decoded.reading_history is None

    def test_book_from_dict_accepts_dict(self) -> None:
        assert book_from_dict({"title": "Emma"}) == Book(title="Emma")


class TestEncoding:
    """Absent fields are left out of the payload."""

    def test_absent_fields_omitted(self) -> None:
        payload = annotated_book_to_dict(AnnotatedBook.create("Emma", ["Jane Austen"]))
        assert payload == {"title": "Emma", "authors": ["Jane Austen"]}


class TestCollections:
    """Tests for JSON array encoding used by the CLI output file."""

    def test_collection_round_trip(self, annotated: AnnotatedBook) -> None:
        books = [annotated, AnnotatedBook.create("Emma")]
        assert decode_annotated_books(encode_annotated_books(books)) == books

    def test_bad_item_names_index(self) -> None:
        with pytest.raises(SchemaError, match="item 1"):
            decode_annotated_books(b'[{"title": "Emma"}, {"authors": []}]')

    def test_non_array_rejected(self) -> None:
        with pytest.raises(SchemaError, match="array"):
            decode_annotated_books(b'{"title": "Emma"}')
