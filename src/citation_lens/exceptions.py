"""Exceptions raised by Citation Lens."""

from __future__ import annotations


class CitationLensError(Exception):
    """Base class for all Citation Lens errors."""


class NotBuiltError(CitationLensError):
    """Raised when an analysis is requested against a graph with no nodes."""

    def __init__(self, message: str = "Citation network not built. Call build() first."):
        super().__init__(message)


class StoreUnavailableError(CitationLensError):
    """Raised when the paper/citation store cannot be reached or read."""


class MalformedRecordError(CitationLensError):
    """Raised when a paper or citation record lacks a required field.

    The network builder catches this per record and skips the offending
    record, so it only escapes when a record is converted directly.
    """

    def __init__(self, message: str, record_id: str | None = None):
        super().__init__(message)
        self.record_id = record_id
