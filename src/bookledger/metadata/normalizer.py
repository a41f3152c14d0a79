# ABOUTME: Value-level cleanup shared by the import adapters.
# ABOUTME: Unwraps spreadsheet text protection, parses messy numbers, builds genre tags.

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

# Spreadsheet tools protect cells like ISBNs as text by writing ="0131103628".
_PROTECTED_PREFIX = '="'
_PROTECTED_SUFFIX = '"'

_ISBN_SEPARATOR_RE = re.compile(r"[\s-]")
_ISBN_RE = re.compile(r"^\d+X?$", re.IGNORECASE | re.ASCII)
_INT_TEXT_RE = re.compile(r"^[+-]?\d+$", re.ASCII)

_GENRE_STRIP_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
GENRE_TAG_PREFIX = "#genre/"


@dataclass(frozen=True)
class RatingScale:
    """Valid rating range for a source. Values outside it are discarded."""

    minimum: int
    maximum: int

    def __contains__(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum


# Goodreads stars are 1-5; 0 means "not rated".
GOODREADS_RATING_SCALE = RatingScale(1, 5)
# LibraryThing stars are 0-5 (0 = unrated); half stars do not fit an int rating.
LIBRARYTHING_RATING_SCALE = RatingScale(1, 5)


def unwrap_protected_text(value: str) -> str:
    """Strip a ``="..."`` text-protection wrapper, e.g. ``="0131103628"`` -> ``0131103628``."""
    if (
        len(value) >= len(_PROTECTED_PREFIX) + len(_PROTECTED_SUFFIX)
        and value.startswith(_PROTECTED_PREFIX)
        and value.endswith(_PROTECTED_SUFFIX)
    ):
        return value[len(_PROTECTED_PREFIX) : -len(_PROTECTED_SUFFIX)]
    return value


def parse_lenient_int(value: Any) -> int | None:
    """Best-effort integer parse. Anything unparseable becomes None.

    Accepts ints, integral floats, and plain decimal text with surrounding whitespace
    (no underscores, no non-ASCII digits).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        return int(text) if _INT_TEXT_RE.match(text) else None
    return None


def parse_positive_int(value: Any) -> int | None:
    parsed = parse_lenient_int(value)
    return parsed if parsed is not None and parsed > 0 else None


def parse_rating(value: Any, scale: RatingScale) -> int | None:
    rating = parse_lenient_int(value)
    if rating is None or rating not in scale:
        return None
    return rating


def clean_isbn(value: str | None) -> str | None:
    """Strip spaces and hyphens; return None unless the rest looks like an ISBN."""
    if not value:
        return None
    cleaned = _ISBN_SEPARATOR_RE.sub("", value)
    if not cleaned or not _ISBN_RE.match(cleaned):
        return None
    return cleaned.upper()


def clean_text(value: str | None) -> str | None:
    """Strip surrounding whitespace; blank text becomes None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def reshape_author_name(name: str) -> str:
    """Turn "Last, First" into "First Last". Names without a comma are unchanged."""
    if "," not in name:
        return name.strip()
    last, first = name.split(",", 1)
    if not first.strip():
        return last.strip()
    return f"{first.strip()} {last.strip()}"


def genre_tag(genre: str) -> str | None:
    """Normalize a free-text genre into a ``#genre/`` tag.

    "Science Fiction!" -> "#genre/science-fiction". Blank input gives None.
    """
    core = genre.lower().strip()
    core = _GENRE_STRIP_RE.sub("", core)
    core = _WHITESPACE_RE.sub("-", core)
    if not core:
        return None
    return GENRE_TAG_PREFIX + core


def genre_tags(genres: Iterable[str]) -> list[str] | None:
    """Tags for a list of genres, de-duplicated in order. None when nothing survives."""
    tags: list[str] = []
    for genre in genres:
        tag = genre_tag(genre)
        if tag and tag not in tags:
            tags.append(tag)
    return tags or None
