# ABOUTME: Unit tests for the Book and AnnotatedBook dataclasses.
# ABOUTME: Validates construction, title validation, and field forwarding.

from datetime import datetime

import pytest

from bookledger.metadata import AnnotatedBook, Book, PartialDate, ReadingHistory


class TestBook:
    """Tests for Book dataclass."""

    def test_minimal_construction(self) -> None:
        """A Book can be created with just a title."""
        book = Book(title="Test Book")
        assert book.title == "Test Book"
        assert book.authors == []
        assert book.author == ""
        assert book.year_published is None
        assert book.original_year_published is None
        assert book.publisher is None
        assert book.isbn is None
        assert book.isbn13 is None
        assert book.number_of_pages is None
        assert book.tags is None

    def test_multiple_authors(self) -> None:
        """The author property joins multiple authors with commas."""
        book = Book(title="Good Omens", authors=["Terry Pratchett", "Neil Gaiman"])
        assert book.author == "Terry Pratchett, Neil Gaiman"

    def test_empty_title_rejected(self) -> None:
        with pytest.raises(ValueError, match="title"):
            Book(title="")

    def test_whitespace_title_rejected(self) -> None:
        with pytest.raises(ValueError, match="title"):
            Book(title="   ")


class TestAnnotatedBook:
    """Tests for AnnotatedBook composition."""

    def test_forwards_book_fields(self) -> None:
        book = Book(title="Dune", authors=["Frank Herbert"], isbn13="9780441013593")
        annotated = AnnotatedBook(book=book, rating=5)
        assert annotated.title == "Dune"
        assert annotated.authors == ["Frank Herbert"]
        assert annotated.isbn13 == "9780441013593"
        assert annotated.author == "Frank Herbert"

    def test_forwarded_setter_updates_book(self) -> None:
        annotated = AnnotatedBook.create("Testing", ["Brian Dewey"])
        annotated.publisher = "Charlie Press"
        annotated.tags = ["#testing"]
        assert annotated.book.publisher == "Charlie Press"
        assert annotated.book.tags == ["#testing"]

    def test_create_defaults(self) -> None:
        annotated = AnnotatedBook.create("Emma")
        assert annotated.book == Book(title="Emma")
        assert annotated.has_annotations is False

    def test_has_annotations(self) -> None:
        annotated = AnnotatedBook.create("Emma", review="Charming")
        assert annotated.has_annotations is True

    def test_ensure_reading_history_reuses_existing(self) -> None:
        annotated = AnnotatedBook.create("Emma")
        history = annotated.ensure_reading_history()
        history.start_reading()
        assert annotated.ensure_reading_history() is history
        assert annotated.reading_history.is_currently_reading is True

    def test_copy_is_deep(self) -> None:
        """Copying the record copies the whole reading history."""
        original = AnnotatedBook.create(
            "Emma",
            date_added=datetime(2021, 1, 1),
            reading_history=ReadingHistory(),
        )
        duplicate = original.copy()
        duplicate.reading_history.finish_reading(PartialDate(2022))
        duplicate.title = "Persuasion"
        assert original.reading_history.entries is None
        assert original.title == "Emma"
        assert duplicate != original
