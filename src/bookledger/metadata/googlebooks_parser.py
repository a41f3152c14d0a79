# ABOUTME: Parsing functions for Google Books search API JSON responses.
# ABOUTME: Converts volume search results into canonical Book instances.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bookledger.metadata.normalizer import parse_positive_int
from bookledger.metadata.types import Book


class IndustryIdentifierType(str, Enum):
    ISBN_10 = "ISBN_10"
    ISBN_13 = "ISBN_13"
    ISSN = "ISSN"
    OTHER = "OTHER"

    @classmethod
    def from_text(cls, value: Any) -> "IndustryIdentifierType":
        """Map the API's type string; anything unrecognized counts as OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass
class IndustryIdentifier:
    type: IndustryIdentifierType
    identifier: str


@dataclass
class ImageLinks:
    small_thumbnail: str | None = None
    thumbnail: str | None = None


@dataclass
class VolumeInfo:
    """The book part of a search item. Every field may be missing."""

    title: str | None = None
    subtitle: str | None = None
    authors: list[str] | None = None
    published_date: str | None = None
    image_links: ImageLinks | None = None
    industry_identifiers: list[IndustryIdentifier] | None = None
    page_count: int | None = None
    publisher: str | None = None

    @property
    def cover_url(self) -> str | None:
        if self.image_links is None:
            return None
        return self.image_links.thumbnail or self.image_links.small_thumbnail


@dataclass
class SearchItem:
    id: str
    volume_info: VolumeInfo


@dataclass
class SearchResponse:
    total_items: int = 0
    items: list[SearchItem] = field(default_factory=list)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_identifiers(raw: Any) -> list[IndustryIdentifier] | None:
    if not isinstance(raw, list):
        return None
    identifiers = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        value = entry.get("identifier")
        if not isinstance(value, str):
            continue
        identifiers.append(
            IndustryIdentifier(
                type=IndustryIdentifierType.from_text(entry.get("type")),
                identifier=value,
            )
        )
    return identifiers


def parse_volume_info(data: dict[str, Any]) -> VolumeInfo:
    """Parse a ``volumeInfo`` object. Wrong-typed fields are dropped."""
    authors = data.get("authors")
    links = data.get("imageLinks")
    image_links = None
    if isinstance(links, dict):
        image_links = ImageLinks(
            small_thumbnail=_str_or_none(links.get("smallThumbnail")),
            thumbnail=_str_or_none(links.get("thumbnail")),
        )
    page_count = data.get("pageCount")
    if isinstance(page_count, bool) or not isinstance(page_count, int):
        page_count = None

    return VolumeInfo(
        title=_str_or_none(data.get("title")),
        subtitle=_str_or_none(data.get("subtitle")),
        authors=[a for a in authors if isinstance(a, str)] if isinstance(authors, list) else None,
        published_date=_str_or_none(data.get("publishedDate")),
        image_links=image_links,
        industry_identifiers=_parse_identifiers(data.get("industryIdentifiers")),
        page_count=page_count,
        publisher=_str_or_none(data.get("publisher")),
    )


def parse_search_response(data: dict[str, Any]) -> SearchResponse:
    """Parse a ``/volumes`` search response.

    The API omits ``items`` entirely when nothing matched.
    """
    total = data.get("totalItems", 0)
    items = []
    for raw in data.get("items") or []:
        if not isinstance(raw, dict):
            continue
        volume_info = raw.get("volumeInfo")
        items.append(
            SearchItem(
                id=str(raw.get("id", "")),
                volume_info=parse_volume_info(volume_info if isinstance(volume_info, dict) else {}),
            )
        )
    return SearchResponse(
        total_items=total if isinstance(total, int) else 0,
        items=items,
    )


def _year_from_published_date(published_date: str | None) -> int | None:
    # "2004", "2004-05" and "2004-05-11" all start with the year
    if not published_date or len(published_date) < 4:
        return None
    prefix = published_date[:4]
    # isdigit() also accepts superscripts, which int() rejects
    if not (prefix.isascii() and prefix.isdecimal()):
        return None
    return int(prefix)


def book_from_item(item: SearchItem) -> Book | None:
    """Build a Book from a search item, or None if the item has no title.

    When several identifiers share a type, the last one wins.
    """
    info = item.volume_info
    if not info.title or not info.title.strip():
        return None

    book = Book(
        title=info.title,
        authors=list(info.authors or []),
        year_published=_year_from_published_date(info.published_date),
        publisher=info.publisher,
        number_of_pages=parse_positive_int(info.page_count),
    )
    # TODO: log a warning when two identifiers share a type so duplicates show up in imports
    for identifier in info.industry_identifiers or []:
        if identifier.type is IndustryIdentifierType.ISBN_10:
            book.isbn = identifier.identifier
        elif identifier.type is IndustryIdentifierType.ISBN_13:
            book.isbn13 = identifier.identifier
        # ISSN and OTHER carry nothing a Book stores
    return book


def books_from_response(response: SearchResponse) -> list[Book]:
    """Convert every titled item in a response; untitled items are dropped."""
    books = []
    for item in response.items:
        book = book_from_item(item)
        if book is not None:
            books.append(book)
    return books
