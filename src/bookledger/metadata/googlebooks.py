# ABOUTME: Google Books search provider implementation.
# ABOUTME: Queries the volumes endpoint and converts results to canonical Books.

import logging

from bookledger.metadata.googlebooks_parser import (
    SearchResponse,
    books_from_response,
    parse_search_response,
)
from bookledger.metadata.http import FetchError, HttpClient
from bookledger.metadata.types import Book

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksProvider:
    """Search provider backed by the Google Books API.

    Uses dependency-injected HttpClient for testability. The API key is
    optional; Google allows a small anonymous quota.
    """

    def __init__(self, http_client: HttpClient, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "googlebooks"

    def search_response(self, term: str) -> SearchResponse:
        """Run a search and return the parsed response.

        Raises:
            FetchError: If the request fails or the body is not a JSON object.
        """
        params = {"q": term}
        if self._api_key:
            params["key"] = self._api_key
        data = self._http.get(GOOGLE_BOOKS_VOLUMES_URL, params=params)
        if not isinstance(data, dict):
            raise FetchError(f"Expected a JSON object from Google Books, got {type(data).__name__}")
        return parse_search_response(data)

    def search(self, term: str) -> list[Book]:
        """Search by free text. Returns an empty list if the request fails."""
        try:
            response = self.search_response(term)
        except FetchError as exc:
            logger.warning("Search failed for %r: %s", term, exc)
            return []
        books = books_from_response(response)
        dropped = len(response.items) - len(books)
        if dropped:
            logger.debug("Dropped %d untitled result(s) for %r", dropped, term)
        return books
