"""Utility functions for Citation Lens."""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Hashable, Iterable
from datetime import date
from typing import Any, TypeVar

K = TypeVar("K", bound=Hashable)


def parse_date(value: Any) -> date | None:
    """Parse a publication date from the formats found in citation datasets.

    Args:
        value: ISO date (YYYY-MM-DD), ISO datetime, bare year (int or
            string), or None.

    Returns:
        Parsed date, or None if the value cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return date(value, 1, 1) if 1 <= value <= 9999 else None

    text = str(value).strip()
    if not text:
        return None

    match = re.match(r"^(\d{4})-(\d{1,2})-(\d{1,2})", text)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None

    # Bare year
    if re.fullmatch(r"\d{4}", text):
        return date(int(text), 1, 1)

    return None


def jaccard(first: Iterable[Hashable], second: Iterable[Hashable]) -> float:
    """Jaccard similarity of two collections treated as sets.

    Returns 0.0 when either set is empty, including when both are.

    Args:
        first: First collection.
        second: Second collection.

    Returns:
        Intersection size divided by union size.
    """
    a = set(first)
    b = set(second)
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def count_values(values: Iterable[K]) -> dict[K, int]:
    """Count occurrences of each value, keyed in first-seen order.

    Args:
        values: Values to count.

    Returns:
        Mapping of value to occurrence count.
    """
    return dict(Counter(values))


def top_counts(values: Iterable[K], limit: int) -> list[tuple[K, int]]:
    """Most frequent values, ties kept in first-seen order.

    Args:
        values: Values to count.
        limit: Maximum number of entries to return.

    Returns:
        List of (value, count) tuples, sorted by count descending.
    """
    return Counter(values).most_common(limit)


def mean(values: Iterable[float]) -> float | None:
    """Arithmetic mean, or None for an empty input."""
    items = list(values)
    if not items:
        return None
    return sum(items) / len(items)


def truncate_text(text: str, max_length: int = 500, suffix: str = "...") -> str:
    """Truncate text to a maximum length.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: Suffix to append if truncated.

    Returns:
        Truncated text.
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix
