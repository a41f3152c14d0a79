# ABOUTME: Unit tests for value normalization shared by the import adapters.
# ABOUTME: Validates text unwrapping, lenient numbers, ISBN cleanup, authors, and genre tags.

from bookledger.metadata.normalizer import (
    GOODREADS_RATING_SCALE,
    RatingScale,
    clean_isbn,
    clean_text,
    genre_tag,
    genre_tags,
    parse_lenient_int,
    parse_positive_int,
    parse_rating,
    reshape_author_name,
    unwrap_protected_text,
)


class TestUnwrapProtectedText:
    """Tests for unwrap_protected_text."""

    def test_strips_wrapper(self) -> None:
        assert unwrap_protected_text('="0131103628"') == "0131103628"

    def test_empty_wrapper(self) -> None:
        assert unwrap_protected_text('=""') == ""

    def test_plain_text_unchanged(self) -> None:
        assert unwrap_protected_text("0131103628") == "0131103628"

    def test_partial_wrapper_unchanged(self) -> None:
        assert unwrap_protected_text('="0131103628') == '="0131103628'
        assert unwrap_protected_text('="') == '="'


class TestParseLenientInt:
    """Tests for parse_lenient_int."""

    def test_int(self) -> None:
        assert parse_lenient_int(42) == 42

    def test_numeric_text_with_whitespace(self) -> None:
        assert parse_lenient_int(" 512 ") == 512

    def test_integral_float(self) -> None:
        assert parse_lenient_int(5.0) == 5

    def test_fractional_float(self) -> None:
        assert parse_lenient_int(4.5) is None

    def test_garbage(self) -> None:
        assert parse_lenient_int("not a number") is None
        assert parse_lenient_int("") is None
        assert parse_lenient_int(None) is None
        assert parse_lenient_int(["1"]) is None

    def test_bool_rejected(self) -> None:
        assert parse_lenient_int(True) is None

    def test_underscored_text_rejected(self) -> None:
        assert parse_lenient_int("1_000") is None

    def test_signed_text(self) -> None:
        assert parse_lenient_int("-3") == -3
        assert parse_lenient_int("+7") == 7

    def test_non_ascii_digits_rejected(self) -> None:
        assert parse_lenient_int("\u0661\u0662") is None
        assert parse_lenient_int("\u00b2") is None

    def test_positive_int(self) -> None:
        assert parse_positive_int("272") == 272
        assert parse_positive_int("0") is None
        assert parse_positive_int(-3) is None


class TestParseRating:
    """Tests for parse_rating."""

    def test_in_range(self) -> None:
        assert parse_rating("4", GOODREADS_RATING_SCALE) == 4

    def test_zero_means_unrated(self) -> None:
        assert parse_rating("0", GOODREADS_RATING_SCALE) is None

    def test_out_of_range(self) -> None:
        assert parse_rating("6", GOODREADS_RATING_SCALE) is None

    def test_custom_scale(self) -> None:
        assert parse_rating(10, RatingScale(0, 10)) == 10


class TestCleanIsbn:
    """Tests for clean_isbn."""

    def test_hyphens_and_spaces_removed(self) -> None:
        assert clean_isbn("978-0-13-110362-7") == "9780131103627"
        assert clean_isbn(" 0 13 110362 8 ") == "0131103628"

    def test_check_digit_x(self) -> None:
        assert clean_isbn("080442957x") == "080442957X"

    def test_invalid(self) -> None:
        assert clean_isbn("") is None
        assert clean_isbn(None) is None
        assert clean_isbn("n/a") is None


class TestCleanText:
    """Tests for clean_text."""

    def test_blank_becomes_none(self) -> None:
        assert clean_text("   ") is None
        assert clean_text(None) is None

    def test_strips(self) -> None:
        assert clean_text("  Ace ") == "Ace"


class TestReshapeAuthorName:
    """Tests for reshape_author_name."""

    def test_last_first(self) -> None:
        assert reshape_author_name("Eco, Umberto") == "Umberto Eco"

    def test_first_last_unchanged(self) -> None:
        assert reshape_author_name("Umberto Eco") == "Umberto Eco"

    def test_single_name_with_comma(self) -> None:
        assert reshape_author_name("Homer,") == "Homer"


class TestGenreTag:
    """Tests for genre_tag and genre_tags."""

    def test_punctuation_and_spaces(self) -> None:
        assert genre_tag("Science Fiction!") == "#genre/science-fiction"

    def test_whitespace_only(self) -> None:
        assert genre_tag("   ") is None

    def test_punctuation_only(self) -> None:
        assert genre_tag("!!!") is None

    def test_whitespace_runs_collapse(self) -> None:
        assert genre_tag("  Fiction   and\tLiterature ") == "#genre/fiction-and-literature"

    def test_tags_deduplicated_in_order(self) -> None:
        assert genre_tags(["Mystery", "Fantasy", "mystery!", " "]) == [
            "#genre/mystery",
            "#genre/fantasy",
        ]

    def test_tags_empty_is_none(self) -> None:
        assert genre_tags([]) is None
        assert genre_tags(["   "]) is None
