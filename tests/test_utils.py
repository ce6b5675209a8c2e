"""Tests for utility functions."""

from datetime import date

import pytest

from citation_lens.utils import count_values, jaccard, mean, parse_date, top_counts, truncate_text


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self):
        """Test parsing an ISO date."""
        assert parse_date("2017-06-12") == date(2017, 6, 12)

    def test_iso_datetime(self):
        """Test parsing an ISO datetime."""
        assert parse_date("2017-06-12T08:30:00.000Z") == date(2017, 6, 12)

    def test_year(self):
        """Test parsing bare years."""
        assert parse_date(2017) == date(2017, 1, 1)
        assert parse_date("2017") == date(2017, 1, 1)

    def test_invalid(self):
        """Test values that are not dates."""
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("June 2017") is None
        assert parse_date("2017-13-45") is None
        assert parse_date(True) is None


class TestJaccard:
    """Tests for jaccard."""

    def test_overlap(self):
        """Test partial overlap."""
        assert jaccard(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)

    def test_identical(self):
        """Test identical sets."""
        assert jaccard(["a"], ["a", "a"]) == 1.0

    def test_empty(self):
        """Test that empty sets score zero."""
        assert jaccard([], ["a"]) == 0.0
        assert jaccard([], []) == 0.0


def test_count_values():
    """Test counting values in first-seen order."""
    counts = count_values([3, 1, 3, 2, 3])

    assert counts == {3: 3, 1: 1, 2: 1}
    assert list(counts) == [3, 1, 2]


def test_top_counts():
    """Test most frequent values."""
    assert top_counts(["x", "y", "y", "z", "z"], 2) == [("y", 2), ("z", 2)]


def test_mean():
    """Test arithmetic mean."""
    assert mean([1, 2, 3]) == 2
    assert mean([]) is None


class TestTruncateText:
    """Tests for truncate_text."""

    def test_short_text(self):
        """Test text that fits."""
        assert truncate_text("short", 10) == "short"

    def test_long_text(self):
        """Test truncation with suffix."""
        assert truncate_text("a" * 20, 10) == "aaaaaaa..."
