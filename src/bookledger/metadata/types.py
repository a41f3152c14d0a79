# ABOUTME: Canonical book record shared by every import source.
# ABOUTME: Book describes the work itself, never a reader's relationship to it.

from dataclasses import dataclass, field


@dataclass
class Book:
    """The work-level description of a book.

    Fields here are about the book itself (title, authors, publication facts).
    Personal data such as ratings or reading dates lives on AnnotatedBook.
    Only the title is required; every source adapter must either find one
    or reject the record.
    """

    title: str
    authors: list[str] = field(default_factory=list)
    year_published: int | None = None
    original_year_published: int | None = None
    publisher: str | None = None
    isbn: str | None = None
    isbn13: str | None = None
    number_of_pages: int | None = None
    tags: list[str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            msg = f"title must be a non-empty string, got {self.title!r}"
            raise ValueError(msg)

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""
