# ABOUTME: Shared pytest fixtures for bookledger tests.
# ABOUTME: Writes sample Goodreads and LibraryThing exports into a temp directory.

import json
from pathlib import Path

import pytest

from tests.fixtures.goodreads_exports import GOODREADS_CSV
from tests.fixtures.librarything_responses import EXPORT


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def goodreads_csv(tmp_path: Path) -> Path:
    """A two-book Goodreads export in the real column layout."""
    path = tmp_path / "goodreads_library_export.csv"
    path.write_text(GOODREADS_CSV, encoding="utf-8")
    return path


@pytest.fixture
def librarything_json(tmp_path: Path) -> Path:
    """A LibraryThing export with two good records and one without a title."""
    path = tmp_path / "librarything_export.json"
    path.write_text(json.dumps(EXPORT, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def corrupt_csv(tmp_path: Path) -> Path:
    """Bytes that are not UTF-8 text."""
    path = tmp_path / "corrupt.csv"
    path.write_bytes(b"\xff\xfe\x00T\x00i\x00\xd8")
    return path
