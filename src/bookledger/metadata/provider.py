# ABOUTME: BookSearchProvider protocol defining the contract for search sources.
# ABOUTME: Any external catalog search (Google Books, etc.) implements this.

from typing import Protocol, runtime_checkable

from bookledger.metadata.types import Book


@runtime_checkable
class BookSearchProvider(Protocol):
    """Protocol for free-text book search services.

    Results are canonical Books; items the service returns without a title
    are dropped rather than reported as errors.
    """

    @property
    def name(self) -> str: ...

    def search(self, term: str) -> list[Book]: ...
