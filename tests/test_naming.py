"""Tests for filename derivation."""

import pytest
from datetime import datetime

from hugo_editor.core.naming import (
    DerivedName,
    derive_filename,
    parse_date,
    resolve_year_month,
    slugify,
    timestamp_suffix,
)

NOW = datetime(2030, 11, 5, 8, 15, 42)


class TestSlugify:
    """Tests for slugify."""

    def test_punctuation_and_spaces(self):
        assert slugify("Hello, World!  Foo") == "hello-world-foo"

    def test_keeps_hyphens_and_underscores(self):
        assert slugify("snake_case and-kebab") == "snake_case-and-kebab"

    def test_whitespace_runs_collapse(self):
        assert slugify("a \t\n b") == "a-b"

    def test_digits_kept(self):
        assert slugify("Top 10 Tips") == "top-10-tips"

    def test_non_ascii_letters_dropped(self):
        assert slugify("Café Über") == "caf-ber"

    @pytest.mark.parametrize("title", [
        "Mixed CASE Title!!",
        "What's   new?  (2024)",
        "A.B.C   D;E:F",
    ])
    def test_output_is_lowercase_without_punctuation(self, title):
        slug = slugify(title)

        assert slug == slug.lower()
        assert all(c.isalnum() or c in "-_" for c in slug)
        assert "--" not in slug


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize("value", [
        "2023-05-14",
        "2023-05-14T10:00:00Z",
        "2023-05-14 10:00:00",
        "2023-05-14T10:00:00+02:00",
        "2023-05-14T10:00:00.123-07:00",
        '"2023-05-14"',
    ])
    def test_supported_formats(self, value):
        parsed = parse_date(value)

        assert parsed is not None
        assert (parsed.year, parsed.month, parsed.day) == (2023, 5, 14)

    @pytest.mark.parametrize("value", [None, "", "yesterday", "14/05/2023", "2023-05-14T10:00:00"])
    def test_unparseable(self, value):
        assert parse_date(value) is None

    def test_offset_is_kept(self):
        parsed = parse_date("2023-12-31T23:30:00-05:00")

        assert parsed.month == 12
        assert parsed.utcoffset() is not None


class TestResolveYearMonth:
    """Tests for resolve_year_month."""

    @pytest.mark.parametrize("value", ["2023-05-14", "2023-05-14T10:00:00Z", "2023-05-14 10:00:00"])
    def test_from_date(self, value):
        assert resolve_year_month(value, NOW) == ("2023", "05")

    @pytest.mark.parametrize("value", [None, "", "not a date"])
    def test_falls_back_to_now(self, value):
        assert resolve_year_month(value, NOW) == ("2030", "11")


class TestDeriveFilename:
    """Tests for derive_filename."""

    def test_filename(self):
        derived = derive_filename("First Post", "2024-03-01", NOW)

        assert derived == DerivedName(year="2024", month="03", slug="first-post")
        assert derived.filename == "2024_03_first-post.md"

    def test_default_title(self):
        assert derive_filename(None, "2024-03-01", NOW).filename == "2024_03_new-post.md"

    def test_with_suffix(self):
        derived = derive_filename("First Post", "2024-03-01", NOW).with_suffix("x")

        assert derived.filename == "2024_03_first-post-x.md"

    def test_timestamp_suffix(self):
        assert timestamp_suffix(NOW) == "20301105-081542"
