# ABOUTME: Cover image lookup against the Open Library covers host.
# ABOUTME: Builds cover URLs by ISBN and downloads them as typed bytes.

from dataclasses import dataclass

from bookledger.metadata.http import FetchError, HttpClient

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/isbn"
COVER_SIZES = ("S", "M", "L")

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


@dataclass
class CoverImage:
    data: bytes
    mime_type: str

    @property
    def extension(self) -> str:
        return _EXTENSIONS.get(self.mime_type, ".jpg")


def build_cover_url(isbn: str, size: str = "M") -> str:
    """Build an Open Library cover image URL for a given ISBN.

    Args:
        isbn: The ISBN to look up cover art for.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    if size not in COVER_SIZES:
        raise ValueError(f"size must be one of {COVER_SIZES}, got {size!r}")
    return f"{_COVERS_BASE_URL}/{isbn}-{size}.jpg"


def fetch_cover(http_client: HttpClient, isbn: str, size: str = "M") -> CoverImage:
    """Download the cover for an ISBN.

    Raises:
        FetchError: If the request fails or the host answers with something
            other than an image.
    """
    url = build_cover_url(isbn, size)
    data, content_type = http_client.get_bytes(url)
    if not content_type or not content_type.startswith("image/"):
        raise FetchError(f"Expected an image from {url}, got {content_type or 'no content type'}")
    if not data:
        raise FetchError(f"Empty cover image from {url}")
    return CoverImage(data=data, mime_type=content_type)
